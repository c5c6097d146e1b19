"""
Fund Models - Typed records for funds, stocks, holdings and search results
Field names are snake_case in Python and camelCase in JSON
"""
import copy
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, field_validator
from pydantic.alias_generators import to_camel


class RiskTier(str, Enum):
    """Risk tier of a fund"""
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class _Record(BaseModel):
    """Base for raw data records: camelCase aliases, unknown fields kept"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='allow',
        frozen=True,
    )

    _raw: Optional[Dict[str, Any]] = PrivateAttr(default=None)
    _invalid_fields: Tuple[str, ...] = PrivateAttr(default=())

    @classmethod
    def from_raw(cls, data: Dict[str, Any]):
        """
        Build a record from an ingested dict, keeping the dict for export

        Optional fields whose values fail validation are read as unset;
        their raw values still come back from to_raw(). A missing or
        invalid required field raises ValidationError.
        """
        try:
            record = cls.model_validate(data)
            invalid: Tuple[str, ...] = ()
        except ValidationError as e:
            errors = e.errors()
            invalid = tuple(sorted({str(err['loc'][0]) for err in errors if err['loc']}))
            if any(err['type'] == 'missing' for err in errors) or not set(invalid) <= set(data):
                raise
            record = cls.model_validate({k: v for k, v in data.items() if k not in invalid})

        record._raw = copy.deepcopy(data)
        record._invalid_fields = invalid
        return record

    @property
    def invalid_fields(self) -> Tuple[str, ...]:
        """Raw keys ignored because their values did not validate"""
        return self._invalid_fields

    def to_raw(self) -> Dict[str, Any]:
        """The dict the record was loaded from, or a camelCase dump for records built in code"""
        if self._raw is not None:
            return copy.deepcopy(self._raw)
        return self.model_dump(by_alias=True, exclude_unset=True, mode='json')


class PortfolioHolding(_Record):
    name: str
    percentage: float = 0.0


class FundRecord(_Record):
    """A fund's descriptive and financial attributes"""
    name: str
    id: Optional[str] = None
    internal_security_id: Optional[int] = None

    short_name: Optional[str] = None
    fund_house: Optional[str] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    asset_class: Optional[str] = None
    sector: Optional[str] = None
    asset_type: Optional[str] = None
    risk: Optional[RiskTier] = None
    risk_o_meter: Optional[str] = None

    nav: Optional[float] = None
    growth_option_nav: Optional[float] = None
    price: Optional[float] = None
    aum: Optional[float] = None
    expense_ratio: Optional[float] = None
    one_year_return: Optional[float] = None
    three_year_return: Optional[float] = None
    five_year_return: Optional[float] = None
    last_month_return: Optional[float] = None
    six_month_return: Optional[float] = None
    returns_1y: Optional[float] = Field(default=None, alias='1YReturns')
    returns_3y: Optional[float] = Field(default=None, alias='3YReturns')
    returns_5y: Optional[float] = Field(default=None, alias='5YReturns')

    dividend_option: Optional[str] = None
    dividend_frequency: Optional[str] = None
    min_investment: Optional[float] = None
    lock_in_period: Optional[str] = None
    switch_option: Optional[bool] = None
    volatility: Optional[str] = None
    benchmark_index: Optional[str] = None
    sharpe_ratio: Optional[float] = None
    amfi_rating: Optional[str] = None
    asset_allocation: Optional[Dict[str, Optional[float]]] = None
    portfolio_holdings: Optional[List[PortfolioHolding]] = None
    redemption_terms: Optional[str] = None
    exit_load: Optional[str] = None
    investment_objective: Optional[str] = None
    fund_manager: Optional[str] = None
    analyst_rating: Optional[str] = None

    @field_validator('id', mode='before')
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator('risk', mode='before')
    @classmethod
    def _normalize_risk(cls, value: Any) -> Any:
        if value is None or isinstance(value, RiskTier):
            return value
        for tier in RiskTier:
            if str(value).strip().lower() == tier.value.lower():
                return tier
        return None

    @property
    def identity_key(self) -> str:
        """id if present, else internalSecurityId, else name"""
        if self.id:
            return self.id
        if self.internal_security_id:
            return str(self.internal_security_id)
        return self.name

    def category_contains(self, *markers: str) -> bool:
        """Check if the category mentions any of the markers"""
        category = self.category or ''
        return any(marker in category for marker in markers)


class StockRecord(_Record):
    name: str
    id: Optional[str] = None
    ticker: Optional[str] = None
    sector: Optional[str] = None
    industry: Optional[str] = None
    current_price: Optional[float] = None
    previous_close: Optional[float] = None
    day_change: Optional[float] = None
    day_change_percentage: Optional[float] = None
    market_cap: Optional[float] = None
    volume: Optional[float] = None
    pe_ratio: Optional[float] = None
    dividend_yield: Optional[float] = None
    fin_code: Optional[int] = None
    price: Optional[float] = None
    ttmpe: Optional[float] = None
    dividend_per_share: Optional[float] = None

    @field_validator('id', mode='before')
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class HoldingRecord(_Record):
    fund_id: Optional[str] = None
    stock_id: Optional[str] = None
    percentage: Optional[float] = None
    share_count: Optional[float] = None
    value: Optional[float] = None
    change_from_last_report: Optional[float] = None
    sr_no: Optional[int] = None
    asset: Optional[str] = None
    sector: Optional[str] = None
    category: Optional[str] = None
    market_value: Optional[float] = None
    parent_internal_security_id: Optional[int] = None
    no_shares: Optional[float] = None
    asset_type: Optional[str] = None

    @field_validator('fund_id', 'stock_id', mode='before')
    @classmethod
    def _ids_as_string(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class MatchResult(BaseModel):
    """One search result: a fund, its relevance and optional explanation/answer"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    fund: FundRecord
    score: float = Field(ge=0.0, le=1.0)
    match_reason: Optional[str] = None
    answer_to_query: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable {fund, score, matchReason?, answerToQuery?}"""
        result: Dict[str, Any] = {
            'fund': self.fund.to_raw(),
            'score': self.score,
        }
        if self.match_reason is not None:
            result['matchReason'] = self.match_reason
        if self.answer_to_query is not None:
            result['answerToQuery'] = self.answer_to_query
        return result


class Suggestion(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: str
    did_you_mean: bool = False


class QueryAnalysis(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_question: bool
    is_natural_language: bool
