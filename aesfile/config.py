import logging
import os
from dotenv import load_dotenv
load_dotenv()

ENC_SUFFIX = os.getenv("AESFILE_ENC_SUFFIX", ".enc")
DECRYPTED_SUFFIX = os.getenv("AESFILE_DECRYPTED_SUFFIX", "_decrypted.txt")
LOG_LEVEL = os.getenv("AESFILE_LOG_LEVEL", "WARNING").strip().upper()
_PREVIEW_RAW = os.getenv("AESFILE_PREVIEW_BYTES", "2048")

# Un sufijo vacío o repetido haría que un artefacto pisara el original o al otro.
if not ENC_SUFFIX:
    raise ValueError("AESFILE_ENC_SUFFIX must not be empty")
if not DECRYPTED_SUFFIX:
    raise ValueError("AESFILE_DECRYPTED_SUFFIX must not be empty")
if ENC_SUFFIX == DECRYPTED_SUFFIX:
    raise ValueError("AESFILE_ENC_SUFFIX and AESFILE_DECRYPTED_SUFFIX must differ")

if not isinstance(logging.getLevelName(LOG_LEVEL), int):
    raise ValueError(f"AESFILE_LOG_LEVEL has an unknown level: {LOG_LEVEL!r}")

try:
    PREVIEW_BYTES = int(_PREVIEW_RAW)
except ValueError:
    raise ValueError(
        f"AESFILE_PREVIEW_BYTES must be an integer, got {_PREVIEW_RAW!r}"
    ) from None


def encrypted_path_for(path: str) -> str:
    return f"{path}{ENC_SUFFIX}"


def decrypted_path_for(path: str) -> str:
    return f"{path}{DECRYPTED_SUFFIX}"
