"""
Shared fixtures: a small in-memory corpus and a search system built over it
"""
import pytest

from config_loader import Config
from fund_corpus import FundCorpusStore
from fund_search import FundSearchSystem

RAW_FUNDS = [
    {
        "id": "1",
        "name": "ICICI Prudential Infrastructure Fund",
        "shortName": "ICICI Infra",
        "fundHouse": "ICICI Prudential",
        "category": "Equity",
        "subCategory": "Sectoral",
        "assetClass": "Equity",
        "sector": "Infrastructure",
        "risk": "High",
        "nav": 89.32,
        "aum": 1523.45,
        "expenseRatio": 1.87,
        "oneYearReturn": 12.45,
    },
    {
        "id": "2",
        "name": "SBI Technology Opportunities Fund",
        "shortName": "SBI Tech",
        "fundHouse": "SBI Mutual Fund",
        "category": "Equity",
        "subCategory": "Sectoral",
        "assetClass": "Equity",
        "sector": "Technology",
        "risk": "High",
        "nav": 172.56,
        "oneYearReturn": 23.56,
    },
    {
        "id": "7",
        "name": "DSP Tax Saver Fund",
        "shortName": "DSP Tax Saver",
        "fundHouse": "DSP Mutual Fund",
        "category": "ELSS",
        "assetClass": "Equity",
        "risk": "Moderate",
        "nav": 56.78,
    },
    {
        "id": "10",
        "name": "SBI Automotive Opportunities Fund",
        "shortName": "SBI Automotive",
        "fundHouse": "SBI Mutual Fund",
        "category": "Equity",
        "sector": "Automobile",
        "risk": "High",
        "portfolioHoldings": [
            {"name": "Mahindra & Mahindra Ltd.", "percentage": 9.84},
            {"name": "Tata Motors Ltd.", "percentage": 7.5},
        ],
    },
    {
        "name": "SBI Fixed Maturity Plan (FMP) - Series 78 (1170 Days)",
        "category": "Debt Schemes",
        "internalSecurityId": 633423598,
        "riskOMeter": "Low to Moderate",
        "nav": 11.7469,
        "1YReturns": 8.08,
        "fundHouse": "SBI Mutual Fund",
    },
]

RAW_STOCKS = [
    {"id": "S1", "name": "Mahindra & Mahindra Ltd.", "sector": "Automobile"},
    {"finCode": 123732, "name": "Ecoboard Industries Ltd.", "sector": "Materials"},
]

RAW_HOLDINGS = [
    {"fundId": "2", "stockId": "S1", "percentage": 4.5},
    {"fundId": "2", "stockId": "123732", "percentage": 6.25},
    {"parentInternalSecurityId": 633423598, "assetType": "Corporate Debt", "marketValue": 3838.83},
]


@pytest.fixture
def store():
    return FundCorpusStore(
        fund_sources=[RAW_FUNDS],
        stock_sources=[RAW_STOCKS],
        holding_sources=[RAW_HOLDINGS],
    )


@pytest.fixture
def funds(store):
    return store.funds()


@pytest.fixture
def fund_by_name(funds):
    def _lookup(name):
        return next(f for f in funds if f.name == name)
    return _lookup


@pytest.fixture
def config(tmp_path):
    return Config(str(tmp_path / "missing.yaml"))


@pytest.fixture
def system(store, config):
    return FundSearchSystem(store=store, config=config, use_embeddings=False)
