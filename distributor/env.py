import os
from typing import Optional

from dotenv import load_dotenv

from distributor.errors import MissingEnvironmentVariableException

load_dotenv()


def env_var(accessor: str, default: Optional[str] = None) -> str:
    """
    Attempt to fetch an environment variable and throw
    an error if not found and no default is given
    """
    var = os.environ.get(accessor, default)
    if not var:
        raise MissingEnvironmentVariableException(accessor)
    return var


class SETTINGS:
    HASHER = env_var("DISTRIBUTOR_HASHER", "sha256")
    DB_PATH = env_var("DISTRIBUTOR_DB_PATH", "ledger/distributor-db.json")
