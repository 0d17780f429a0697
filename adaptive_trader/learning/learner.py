"""
Rule-based parameter adaptation.

Given the metrics of the cycle just evaluated, nudge the configuration for the
next one. Every adjustment is scaled by learning_rate and the result is always
clamped to the valid ranges as the last step:
- win rate below WIN_RATE_TARGET -> raise threshold by lr * (target - win_rate)
- max drawdown above RISK_BUDGET -> shrink risk_per_trade and max_position by
  the factor (1 - lr * (max_drawdown - RISK_BUDGET))
- positive return within RISK_BUDGET -> raise risk_per_trade by lr * RISK_REWARD_STEP

Windows and learning rate pass through unchanged.
"""
import logging
from dataclasses import dataclass
from typing import Dict

from ..shared.defaults import RISK_BUDGET, WIN_RATE_TARGET, RISK_REWARD_STEP
from ..signals.config import StrategyConfig, clamp_config
from ..evaluation.metrics import Metrics


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LearnerRules:
    """Coefficients of the adaptation rules."""
    win_rate_target: float = WIN_RATE_TARGET
    risk_budget: float = RISK_BUDGET
    risk_reward_step: float = RISK_REWARD_STEP


DEFAULT_RULES = LearnerRules()


def threshold_adjustment(win_rate: float, learning_rate: float, rules: LearnerRules = DEFAULT_RULES) -> float:
    """Increase of threshold before clamping (0 when the win rate meets the target)."""
    if win_rate >= rules.win_rate_target:
        return 0.0
    return learning_rate * (rules.win_rate_target - win_rate)


def drawdown_scale(max_drawdown: float, learning_rate: float, rules: LearnerRules = DEFAULT_RULES) -> float:
    """Multiplier for risk_per_trade and max_position, in [0, 1]."""
    if max_drawdown <= rules.risk_budget:
        return 1.0
    return max(0.0, 1.0 - learning_rate * (max_drawdown - rules.risk_budget))


def adapt_config(
    config: StrategyConfig,
    metrics: Metrics,
    rules: LearnerRules = DEFAULT_RULES,
) -> StrategyConfig:
    """
    Produce the next configuration from the current one and its metrics.

    Deterministic and total: every valid config and metrics pair maps to one
    valid config.
    """
    lr = config.learning_rate
    adjustments: Dict[str, float] = {}

    threshold = config.threshold
    risk_per_trade = config.risk_per_trade
    max_position = config.max_position

    delta = threshold_adjustment(metrics.win_rate, lr, rules)
    if delta:
        threshold += delta
        adjustments['threshold'] = delta

    scale = drawdown_scale(metrics.max_drawdown, lr, rules)
    if scale != 1.0:
        risk_per_trade *= scale
        max_position *= scale
        adjustments['size_scale'] = scale
    elif metrics.cumulative_return > 0 and metrics.max_drawdown < rules.risk_budget:
        step = lr * rules.risk_reward_step
        risk_per_trade += step
        adjustments['risk_per_trade'] = step

    updated = clamp_config(
        short_window=config.short_window,
        long_window=config.long_window,
        threshold=threshold,
        risk_per_trade=risk_per_trade,
        max_position=max_position,
        learning_rate=lr,
    )

    if adjustments:
        logger.debug(f"Learner adjustments {adjustments} -> {updated}")
    return updated
