from .conversion_service import ConversionService
from .price_service import PriceService
from .wakeup_service import CooldownLimiter, WakeupOutcome, WakeupService

__all__ = ['ConversionService', 'CooldownLimiter', 'PriceService', 'WakeupOutcome', 'WakeupService']
