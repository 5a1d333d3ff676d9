"""Entrypoint del script `recurly-v2`.

`python -m recurly_v2.main ...` equivale a invocar el script instalado.
"""

from __future__ import annotations

import sys

from recurly_v2.cli.main import app


def main(argv: list[str] | None = None) -> None:
    # Las tablas de rich usan caracteres fuera de cp1252 en consolas Windows.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    app(args=argv, prog_name="recurly-v2")


if __name__ == "__main__":
    main()
