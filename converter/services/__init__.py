"""Service layer modules."""

from .conversion import (
    ConversionEngine,
    ConversionRequest,
    ConversionResult,
    is_amount_acceptable,
    parse_amount,
    round_currency,
    round_rate,
)
from .converter import CurrencyConverter, get_converter, init_converter
from .formatting import (
    currency_symbol,
    format_amount,
    format_history_entry,
    format_rate,
    format_result,
)
from .history import HistoryEntry, HistoryLedger
from .preferences import PreferenceStore, Preferences
from .rate_cache import RateCache
