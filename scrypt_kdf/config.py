import os
from typing import Any, Dict, Mapping, Optional

# Config
SCRYPT_LOG_N = 14
SCRYPT_R = 8
SCRYPT_P = 1
SCRYPT_MAX_MEMORY = 32 * 1024 * 1024

DB_SERVER = r'localhost\MSSQLSERVER02'
DB_NAME = 'ScryptDB'
DB_DRIVER = '{ODBC Driver 17 for SQL Server}'

ENV_PREFIX = 'SCRYPT_KDF_'

_INT_KEYS = ('SCRYPT_LOG_N', 'SCRYPT_R', 'SCRYPT_P', 'SCRYPT_MAX_MEMORY')
_STR_KEYS = ('DB_SERVER', 'DB_NAME', 'DB_DRIVER', 'DB_CONN_STR', 'SECRET_KEY')


def connection_string(server: str = DB_SERVER, name: str = DB_NAME, driver: str = DB_DRIVER) -> str:
    return f'DRIVER={driver};SERVER={server};DATABASE={name};Trusted_Connection=yes;'


def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Defaults above, overridden by SCRYPT_KDF_<KEY> environment variables."""
    if environ is None:
        environ = os.environ

    config: Dict[str, Any] = {
        'SCRYPT_LOG_N': SCRYPT_LOG_N,
        'SCRYPT_R': SCRYPT_R,
        'SCRYPT_P': SCRYPT_P,
        'SCRYPT_MAX_MEMORY': SCRYPT_MAX_MEMORY,
        'DB_SERVER': DB_SERVER,
        'DB_NAME': DB_NAME,
        'DB_DRIVER': DB_DRIVER,
    }
    for key in _INT_KEYS:
        value = environ.get(ENV_PREFIX + key)
        if value is not None:
            try:
                config[key] = int(value)
            except ValueError as e:
                raise ValueError(f'{ENV_PREFIX}{key} must be an integer, got {value!r}') from e
    for key in _STR_KEYS:
        value = environ.get(ENV_PREFIX + key)
        if value is not None:
            config[key] = value

    config.setdefault('DB_CONN_STR',
                      connection_string(config['DB_SERVER'], config['DB_NAME'], config['DB_DRIVER']))
    return config
