import logging
import os
import secrets

# --- defaults, each overridable via PEG_<KEY> ---
DEFAULTS = {
    'host': '127.0.0.1',
    'port': 5000,
    'debug': False,
    'secret_key': None,          # generated per process when unset
    'log_level': 'INFO',
}

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _coerce(key, raw):
    default = DEFAULTS[key]
    if isinstance(default, bool):
        return raw.strip().lower() in ('1', 'true', 'yes', 'on')
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"PEG_{key.upper()} must be an integer, got {raw!r}") from None
    return raw


def load_config(environ=None):
    environ = os.environ if environ is None else environ
    config = dict(DEFAULTS)
    for key in DEFAULTS:
        raw = environ.get(f"PEG_{key.upper()}")
        if raw is not None:
            config[key] = _coerce(key, raw)
    if not config['secret_key']:
        config['secret_key'] = secrets.token_hex(16)
    config['log_level'] = str(config['log_level']).upper()
    return config


def setup_logging(level='INFO'):
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO),
                        format=LOG_FORMAT)

