"""Script de ejecución (sin instalar el paquete).

Por qué existe:
- Permite ejecutar la CLI con `python -m main` durante desarrollo.
- El código vive en `src/` (src layout): sin instalación editable Python no
  encuentra `csaf_checker`.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from csaf_checker.cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
