from .base import PriceSource
from .run_job import RunJobClient
from .supabase import SupabasePriceSource

__all__ = ['PriceSource', 'RunJobClient', 'SupabasePriceSource']
