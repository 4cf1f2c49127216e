# --------------------------------------------------------------
# File: __main__.py
# Description: Punto de entrada de consola para cifrar y verificar un archivo.
# --------------------------------------------------------------
"""Ejecución interactiva: `python -m aesfile`."""

from __future__ import annotations

import logging
import sys

from aesfile import config
from aesfile.errors import StageError
from aesfile.pipeline import run_interactive


def main() -> int:
    """Lanza el pipeline interactivo y traduce los errores fatales a código de salida.

    Returns:
        int: 0 si la ejecución termina, 1 ante un error fatal, 130 si se interrumpe.

    """

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        report = run_interactive()
    except StageError as exc:
        print(f"Error during {exc.stage}: {exc.cause}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nAborted.", file=sys.stderr)
        return 130

    if not report.verified:
        print("Warning: decrypted content does not match the original file.", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
