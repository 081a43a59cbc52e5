"""Package entry point for ``python -m structjson``.

WHY: Users run the converter as ``python -m structjson input.json``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.

HOW: Delegates to the CLI's main() and exits with its status.
"""

import sys

from structjson.cli import main

if __name__ == "__main__":
    sys.exit(main())
