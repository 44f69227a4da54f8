import json
import logging

from config.logging_config import JSONFormatter
from config.settings import Settings


def test_defaults_match_resilience_limits():
	settings = Settings(_env_file=None)

	assert settings.MAX_CONCURRENT_CALLS == 10
	assert settings.MAX_QUEUED_CALLS == 50
	assert settings.MAX_RETRY_ATTEMPTS == 3
	assert settings.INITIAL_BACKOFF_SECONDS == 1.0
	assert settings.excluded_currencies == frozenset({'TRY', 'PLN', 'THB', 'MXN'})


def test_environment_overrides(monkeypatch):
	monkeypatch.setenv('max_retry_attempts', '5')
	monkeypatch.setenv('EXCLUDED_CURRENCIES', '["try", "usd"]')

	settings = Settings(_env_file=None)

	assert settings.MAX_RETRY_ATTEMPTS == 5
	assert settings.excluded_currencies == frozenset({'TRY', 'USD'})


def test_json_formatter_emits_one_object_per_record():
	record = logging.LogRecord('gateway', logging.WARNING, __file__, 10, 'Retry %s failed', (1,), None)

	entry = json.loads(JSONFormatter().format(record))

	assert entry['level'] == 'WARNING'
	assert entry['message'] == 'Retry 1 failed'
	assert entry['logger'] == 'gateway'
