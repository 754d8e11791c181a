class CurrencyException(Exception):
    pass


class ValidationError(CurrencyException):
    pass


class AggregationError(CurrencyException):
    pass


class PriceSourceError(CurrencyException):
    pass


class CacheError(CurrencyException):
    pass


class WakeupError(CurrencyException):
    pass
