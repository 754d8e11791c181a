import pytest

from config.settings import Settings

ENV_KEYS = [
    'SUPABASE_URL', 'NEXT_PUBLIC_SUPABASE_URL', 'VITE_SUPABASE_URL',
    'SUPABASE_ANON_KEY', 'NEXT_PUBLIC_SUPABASE_ANON_KEY', 'VITE_SUPABASE_ANON_KEY',
    'API_RUN_URL', 'NEXT_PUBLIC_API_RUN_URL', 'VITE_API_RUN_URL',
    'CRON_TOKEN', 'CROM_TOKEN', 'NEXT_PUBLIC_CROM_TOKEN', 'VITE_CROM_TOKEN',
    'PRICE_SOURCE', 'WAKEUP_COOLDOWN_SECONDS',
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.PRICE_SOURCE == 'supabase'
    assert settings.PRICES_TABLE == 'p2p_prices'
    assert settings.SUPABASE_URL == ''
    assert settings.WAKEUP_COOLDOWN_SECONDS == 60
    assert settings.KEEPALIVE_ENABLED is False


def test_next_public_name_is_accepted(monkeypatch):
    monkeypatch.setenv('NEXT_PUBLIC_SUPABASE_URL', 'https://next.supabase.co')
    monkeypatch.setenv('VITE_SUPABASE_ANON_KEY', 'vite-key')

    settings = Settings(_env_file=None)

    assert settings.SUPABASE_URL == 'https://next.supabase.co'
    assert settings.SUPABASE_ANON_KEY == 'vite-key'


def test_precedence_plain_then_next_public_then_vite(monkeypatch):
    monkeypatch.setenv('VITE_SUPABASE_URL', 'https://vite.supabase.co')
    monkeypatch.setenv('NEXT_PUBLIC_SUPABASE_URL', 'https://next.supabase.co')

    assert Settings(_env_file=None).SUPABASE_URL == 'https://next.supabase.co'

    monkeypatch.setenv('SUPABASE_URL', 'https://plain.supabase.co')

    assert Settings(_env_file=None).SUPABASE_URL == 'https://plain.supabase.co'


def test_init_kwargs_override_environment(monkeypatch):
    monkeypatch.setenv('SUPABASE_URL', 'https://env.supabase.co')

    settings = Settings(_env_file=None, SUPABASE_URL='https://explicit.supabase.co')

    assert settings.SUPABASE_URL == 'https://explicit.supabase.co'


def test_crom_token_aliases(monkeypatch):
    monkeypatch.setenv('NEXT_PUBLIC_CROM_TOKEN', 'ping-token')
    monkeypatch.setenv('CRON_TOKEN', 'job-token')

    settings = Settings(_env_file=None)

    assert settings.CROM_TOKEN == 'ping-token'
    assert settings.CRON_TOKEN == 'job-token'


def test_public_config_exposes_only_whitelisted_values():
    settings = Settings(
        _env_file=None,
        SUPABASE_URL='https://project.supabase.co',
        SUPABASE_ANON_KEY='anon',
        CRON_TOKEN='secret',
    )

    config = settings.public_config()

    assert config == {
        'NEXT_PUBLIC_SUPABASE_URL': 'https://project.supabase.co',
        'NEXT_PUBLIC_SUPABASE_ANON_KEY': 'anon',
        'VITE_SUPABASE_URL': 'https://project.supabase.co',
        'VITE_SUPABASE_ANON_KEY': 'anon',
    }
    assert 'secret' not in config.values()
