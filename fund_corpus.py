"""
Fund Corpus Store - Deduplicated, read-only view over raw fund, stock and holding records
Category replacement is copy-on-write, so readers always see a whole snapshot
"""
import json
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ValidationError

from constants import DATA_CATEGORIES
from enhanced_error_handler import DataFormatError
from fund_models import FundRecord, HoldingRecord, StockRecord
from structured_logger import get_logger

RECORD_TYPES = {
    'funds': FundRecord,
    'stocks': StockRecord,
    'holdings': HoldingRecord,
}


@dataclass(frozen=True)
class CorpusSnapshot:
    """Immutable view of all three categories at one point in time"""
    funds: Tuple[FundRecord, ...]
    stocks: Tuple[StockRecord, ...]
    holdings: Tuple[HoldingRecord, ...]


def deduplicate_funds(funds: Iterable[FundRecord]) -> List[FundRecord]:
    """Keep the first fund for every identity key (id, internalSecurityId, name)"""
    unique: Dict[str, FundRecord] = {}
    for fund in funds:
        key = fund.identity_key
        if key and key not in unique:
            unique[key] = fund
    return list(unique.values())


def parse_records(category: str, payload: Any) -> List[BaseModel]:
    """
    Validate a raw payload for one category

    Optional fields with unusable values are ignored (and logged); the
    record keeps its raw values for export.

    Args:
        category: 'funds', 'stocks' or 'holdings'
        payload: Decoded JSON value

    Returns:
        Parsed records, in input order

    Raises:
        DataFormatError: payload is not an array of objects, or a record
            lacks a valid required field (fund and stock name)
    """
    if category not in RECORD_TYPES:
        raise DataFormatError(f"Unknown data category: {category}", category)
    if not isinstance(payload, list):
        raise DataFormatError("Data must be an array", category)

    record_type = RECORD_TYPES[category]
    records = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise DataFormatError(f"Record {index} is not an object", category)
        try:
            record = record_type.from_raw(item)
        except ValidationError as e:
            raise DataFormatError(f"Record {index} is invalid: {e.error_count()} field error(s)", category) from e
        if record.invalid_fields:
            get_logger().warning("Ignoring invalid field values",
                                 category=category, record=index,
                                 fields=list(record.invalid_fields))
        records.append(record)
    return records


class FundCorpusStore:
    """Holds the current corpus snapshot and swaps categories atomically"""

    def __init__(self, fund_sources: Sequence[Any] = (),
                 stock_sources: Sequence[Any] = (),
                 holding_sources: Sequence[Any] = ()):
        """
        Build the corpus from raw sources

        Args:
            fund_sources: Raw fund arrays, concatenated in order
            stock_sources: Raw stock arrays
            holding_sources: Raw holding arrays

        Raises:
            DataFormatError: if any source is malformed
        """
        self.logger = get_logger()
        self._lock = threading.Lock()
        self._listeners: List[Callable[[str], None]] = []

        funds = [f for source in fund_sources for f in parse_records('funds', source)]
        stocks = [s for source in stock_sources for s in parse_records('stocks', source)]
        holdings = [h for source in holding_sources for h in parse_records('holdings', source)]

        self._snapshot = CorpusSnapshot(
            funds=tuple(deduplicate_funds(funds)),
            stocks=tuple(stocks),
            holdings=tuple(holdings),
        )
        self.logger.info("Corpus loaded",
                         funds=len(self._snapshot.funds),
                         stocks=len(self._snapshot.stocks),
                         holdings=len(self._snapshot.holdings))

    @classmethod
    def from_files(cls, funds_path: str, stocks_path: Optional[str] = None,
                   holdings_path: Optional[str] = None) -> 'FundCorpusStore':
        """Load one source per category from JSON files (missing file = empty source)"""
        def _read(path: Optional[str], category: str) -> List[Any]:
            if not path or not Path(path).exists():
                return []
            with open(path, 'r', encoding='utf-8') as f:
                try:
                    return [json.load(f)]
                except json.JSONDecodeError as e:
                    raise DataFormatError(f"{path} is not valid JSON: {e}", category) from e

        return cls(
            fund_sources=_read(funds_path, 'funds'),
            stock_sources=_read(stocks_path, 'stocks'),
            holding_sources=_read(holdings_path, 'holdings'),
        )

    def snapshot(self) -> CorpusSnapshot:
        """Current snapshot; stays consistent even if a replace happens later"""
        return self._snapshot

    def load(self) -> Tuple[FundRecord, ...]:
        """Ordered, deduplicated funds"""
        return self._snapshot.funds

    def funds(self) -> Tuple[FundRecord, ...]:
        return self._snapshot.funds

    def stocks(self) -> Tuple[StockRecord, ...]:
        return self._snapshot.stocks

    def holdings(self) -> Tuple[HoldingRecord, ...]:
        return self._snapshot.holdings

    def add_replace_listener(self, listener: Callable[[str], None]):
        """Register a callback invoked with the category name after each replace"""
        self._listeners.append(listener)

    def replace_category(self, category: str, payload: Any) -> int:
        """
        Wholesale-replace one category

        Args:
            category: 'funds', 'stocks' or 'holdings'
            payload: Decoded JSON array

        Returns:
            Number of records now held for the category

        Raises:
            DataFormatError: payload rejected, corpus unchanged
        """
        records = parse_records(category, payload)

        with self._lock:
            current = self._snapshot
            if category == 'funds':
                new_snapshot = CorpusSnapshot(tuple(deduplicate_funds(records)), current.stocks, current.holdings)
                count = len(new_snapshot.funds)
            elif category == 'stocks':
                new_snapshot = CorpusSnapshot(current.funds, tuple(records), current.holdings)
                count = len(records)
            else:
                new_snapshot = CorpusSnapshot(current.funds, current.stocks, tuple(records))
                count = len(records)
            self._snapshot = new_snapshot

        self.logger.info("Corpus category replaced", category=category, records=count)
        for listener in self._listeners:
            listener(category)
        return count

    def import_json(self, category: str, text: str) -> int:
        """Parse JSON text and replace the category with it"""
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise DataFormatError(f"Invalid JSON: {e}", category) from e
        return self.replace_category(category, payload)

    def to_raw(self, category: str) -> List[Dict[str, Any]]:
        """Dump a category back to raw dicts (only the fields that were provided)"""
        if category not in DATA_CATEGORIES:
            raise DataFormatError(f"Unknown data category: {category}", category)
        return [record.to_raw() for record in getattr(self._snapshot, category)]
