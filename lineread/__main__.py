"""Module entrypoint for ``python -m lineread``.

All argument parsing happens in ``lineread.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
