"""
Constants and Configuration
Centralized constants to avoid duplication and magic strings
"""
from typing import Dict, List

# Fund alias mappings (order matters - first matching alias wins)
# Maps common aliases and abbreviations to the canonical fund name or short name
FUND_ALIASES: Dict[str, str] = {
    # SBI funds
    'sbi auto': 'SBI Automotive Opportunities Fund',
    'sbi automotive': 'SBI Automotive Opportunities Fund',
    'sbi auto fund': 'SBI Automotive Opportunities Fund',
    'sbi auto opportunities': 'SBI Automotive Opportunities Fund',

    # HDFC funds
    'hdfc g-sec': 'HDFC Nifty G-Sec Sep 2032 Index Fund',
    'hdfc g-sec 2032': 'HDFC Nifty G-Sec Sep 2032 Index Fund',
    'hdfc nifty gilt': 'HDFC Nifty G-Sec Sep 2032 Index Fund',
    'hdfc nifty gilt 2032': 'HDFC Nifty G-Sec Sep 2032 Index Fund',
    'hdfc fmp': 'HDFC FMP 2638D February 2023',
    'hdfc fmp 2638d': 'HDFC FMP 2638D February 2023',
    'hdfc fmp feb 2023': 'HDFC FMP 2638D February 2023',
    'hdfc fixed maturity plan feb 2023': 'HDFC FMP 2638D February 2023',

    # Bandhan funds
    'bandhan bond income': 'Bandhan Bond Fund - Income Plan',
    'bandhan income plan': 'Bandhan Bond Fund - Income Plan',
    'bandhan bond': 'Bandhan Bond Fund - Income Plan',
    'bandhan ust': 'Bandhan Ultra Short Term Fund',
    'bandhan ust fund': 'Bandhan Ultra Short Term Fund',
    'bandhan ultra short': 'Bandhan Ultra Short Term Fund',
    'bandhan ultra short term': 'Bandhan Ultra Short Term Fund',
    'bandhan short term': 'Bandhan Ultra Short Term Fund',
    'bandhan long term debt': 'Bandhan Bond Fund - Income Plan',

    # DSP funds
    'dsp fmp 270': 'DSP FMP Series 270 - 1144 Days',
    'dsp fmp 1144 days': 'DSP FMP Series 270 - 1144 Days',
    'dsp fixed maturity 270': 'DSP FMP Series 270 - 1144 Days',

    # Axis funds
    'axis floater': 'Axis Floating Rate Fund',
    'axis floating rate': 'Axis Floating Rate Fund',
    'axis frf': 'Axis Floating Rate Fund',

    # ICICI funds
    'icici 1199 days fmp': 'ICICI Prudential Fixed Maturity Plan - Series 88 - 1199 days Plan Q',
    'icici pru fmp 1199q': 'ICICI Prudential Fixed Maturity Plan - Series 88 - 1199 days Plan Q',
    'icici fmp series 88': 'ICICI Prudential Fixed Maturity Plan - Series 88 - 1199 days Plan Q',

    # Motilal Oswal funds
    'mo business cycle': 'Motilal Oswal Business Cycle Fund',
    'motilal cycle fund': 'Motilal Oswal Business Cycle Fund',
    'motilal business cycle': 'Motilal Oswal Business Cycle Fund',

    # Franklin funds
    'franklin liquid': 'Franklin India Liquid Fund',
    'franklin india liquid': 'Franklin India Liquid Fund',
    'franklin short term': 'Franklin India Liquid Fund',
}

# Query classification keywords (presence of any one marks a financial question)
FINANCIAL_KEYWORDS: List[str] = [
    'nav', 'return', 'dividend', 'sip', 'investment', 'fund', 'lock-in',
    'switch', 'long-term', 'expense ratio', 'risk', 'benchmark', 'sharpe',
    'amfi', 'asset', 'portfolio', 'redemption', 'objective', 'minimum',
    'performance', 'volatility', 'better than', 'outperforming', 'aum',
    'manager', 'horizon', 'review', 'idcw', 'growth option', 'swp',
    'conservative', 'suitable', 'opinion', 'actively managed',
    'open-ended', 'closed-ended', 'cagr', 'surplus', 'retirement'
]

# Words that open a natural-language style query
INTERROGATIVE_WORDS = ('what', 'how', 'can', 'is', 'should', 'tell', 'does')
NATURAL_LANGUAGE_MIN_LENGTH = 3

# Lexical scoring weights (first satisfied rule wins for a term)
TERM_SCORE_COMBINED_TEXT = 1.0
TERM_SCORE_NAME = 0.9
TERM_SCORE_SHORT_NAME = 0.85
TERM_SCORE_FUND_HOUSE = 0.7
TERM_SCORE_CATEGORY = 0.6
TERM_SCORE_SECTOR = 0.5
TERM_SCORE_FUZZY_NAME = 0.4
TERM_SCORE_FUZZY_SHORT_NAME = 0.35

# Fields concatenated (in priority order) into the searchable fund text
SEARCHABLE_FIELDS = (
    'name', 'short_name', 'fund_house', 'category',
    'sub_category', 'asset_class', 'sector', 'asset_type'
)

# Edit distance thresholds
FUZZY_MATCH_MAX_DISTANCE = 2
SUGGESTION_MAX_DISTANCE = 3
DID_YOU_MEAN_MAX_LENGTH = 20

# Search settings
DEFAULT_MAX_RESULTS = 10
DEFAULT_MIN_SCORE = 0.1
DEFAULT_SUGGESTION_LIMIT = 5

# Orchestrator scores and messages
ANSWERED_QUESTION_SCORE = 0.95
RESOLVED_FUND_SCORE = 0.90
ANSWERED_QUESTION_REASON = "This fund specifically matches your question."
RESOLVED_FUND_REASON = "This fund matches your search terms."
ANSWER_NOT_AVAILABLE = "Information about {name} for your query is not available."

# Embedding ranker settings
DEFAULT_EMBEDDING_MODEL = 'all-MiniLM-L6-v2'
EMBEDDING_SIMILARITY_THRESHOLD = 0.5
EMBEDDING_TIMEOUT_SECONDS = 5.0
EMBEDDING_TEXT_FIELDS = ('name', 'short_name', 'fund_house', 'category', 'sub_category', 'sector')

# Corpus data categories
DATA_CATEGORIES = ('funds', 'stocks', 'holdings')

# Common keyword searches offered as suggestions
SEARCH_EXAMPLES = [
    'icici infra',
    'sbi tech',
    'hdfc small cap',
    'kotak emerging',
    'nippon pharma',
    'axis elss',
    'tata banking'
]

# Natural language example questions offered as suggestions
NATURAL_LANGUAGE_EXAMPLES = [
    "What is the NAV of ICICI Prudential Transportation and Logistics Fund?",
    "What's the growth option NAV of UTI Money Market Fund?",
    "What was the last month's return of Canara Robeco ELSS Tax Saver?",
    "Is Kotak Focused Equity Fund better than other similar funds?",
    "Tell me the expense ratio of Tata BSE Select Business Groups Index Fund.",
    "Can I start an SIP with UTI Money Market Fund?",
    "What are the recent returns for Bandhan Credit Risk Fund?",
    "Should I consider investing in Aditya Birla Sun Life Pharma & Healthcare Fund?",
    "What's the dividend frequency for ICICI Prudential Transportation and Logistics Fund?",
    "Does Groww Nifty EV & New Age Automotive ETF FOF have any lock-in period?",
    "How has Union Overnight Fund performed over the last year?",
    "What's the Sharpe Ratio of Kotak Focused Equity Fund?",
    "Tell me about the portfolio holdings of Canara Robeco ELSS Tax Saver.",
    "Is it beneficial to hold UTI Money Market Fund long-term?",
    "What's the risk associated with Groww Nifty EV & New Age Automotive ETF FOF?"
]

# Category markers used to infer fund structure
CLOSED_ENDED_MARKERS = ('FMP', 'Fixed Maturity')
PASSIVE_MARKERS = ('Index', 'ETF')
OPEN_ENDED_CATEGORIES = ('Liquid', 'Ultra Short', 'Money Market', 'Overnight')
SHORT_PARKING_CATEGORIES = ('Liquid', 'Ultra Short', 'Low Duration')
