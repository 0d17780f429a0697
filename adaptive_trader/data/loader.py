"""
Candle window loader.

Reads reconciled candles from CSV into the Candle records the engine consumes.
Expected columns:
- timestamp: epoch milliseconds or any datetime pandas can parse
- primary_open/high/low/close/volume, secondary_open/...: optional per source
- mid_price, spread: optional; derived from the source closes when absent
"""
import math
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from ..shared.defaults import CANDLE_WINDOW
from ..shared.types import Candle, PriceBar


SOURCES = ('primary', 'secondary')
BAR_FIELDS = ('open', 'high', 'low', 'close', 'volume')


def _to_epoch_ms(values: pd.Series) -> pd.Series:
    """Normalize a timestamp column to integer epoch milliseconds."""
    if pd.api.types.is_numeric_dtype(values):
        return values.astype('int64')
    parsed = pd.to_datetime(values, utc=True)
    return (parsed - pd.Timestamp(0, tz='UTC')) // pd.Timedelta(milliseconds=1)


def _bar_from_row(row: pd.Series, source: str) -> Optional[PriceBar]:
    close = row.get(f'{source}_close')
    if close is None or pd.isna(close):
        return None
    values = {}
    for name in BAR_FIELDS:
        value = row.get(f'{source}_{name}')
        if value is None or pd.isna(value):
            # Missing OHLC fields fall back to the close, missing volume to 0
            value = 0.0 if name == 'volume' else close
        values[name] = float(value)
    return PriceBar(**values)


def candles_from_frame(df: pd.DataFrame) -> List[Candle]:
    """
    Convert a DataFrame of reconciled rows into Candles.

    Raises:
        ValueError: If the timestamp column is missing, two rows share a
            timestamp, or a row has no price. Rows are sorted by timestamp
    """
    if 'timestamp' not in df.columns:
        raise ValueError("Candle data needs a 'timestamp' column")
    if df.empty:
        return []

    df = df.copy()
    df['timestamp'] = _to_epoch_ms(df['timestamp'])
    df = df.sort_values('timestamp', kind='mergesort').reset_index(drop=True)

    duplicated = df['timestamp'].duplicated()
    if duplicated.any():
        first = int(df.loc[duplicated, 'timestamp'].iloc[0])
        raise ValueError(f"Duplicate candle timestamp: {first}")

    has_mid = 'mid_price' in df.columns
    candles: List[Candle] = []
    for _, row in df.iterrows():
        timestamp = int(row['timestamp'])
        primary, secondary = (_bar_from_row(row, source) for source in SOURCES)

        if has_mid and not pd.isna(row['mid_price']):
            spread = row.get('spread')
            if spread is None or pd.isna(spread):
                spread = (
                    abs(primary.close - secondary.close)
                    if primary is not None and secondary is not None
                    else 0.0
                )
            candles.append(Candle(
                timestamp=timestamp,
                mid_price=float(row['mid_price']),
                spread=float(spread),
                primary=primary,
                secondary=secondary,
            ))
        elif primary is not None or secondary is not None:
            candles.append(Candle.from_bars(timestamp, primary, secondary))
        else:
            raise ValueError(f"Candle at {timestamp} has no price")

    for candle in candles:
        if not math.isfinite(candle.mid_price):
            raise ValueError(f"Candle at {candle.timestamp} has a non-finite mid_price")
    return candles


def load_candles(
    path: Union[str, Path],
    limit: Optional[int] = CANDLE_WINDOW,
) -> List[Candle]:
    """
    Load the most recent candles from a CSV file.

    Args:
        path: CSV file of reconciled candles
        limit: Keep only the last N candles (None = all)

    Returns:
        Candles in strictly increasing timestamp order

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Candle file not found: {path}")

    df = pd.read_csv(path)
    candles = candles_from_frame(df)
    if limit is not None and limit >= 0:
        candles = candles[-limit:] if limit else []
    return candles
