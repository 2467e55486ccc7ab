"""optdoc executable module.

The console script entry point is cli.main(); this module only serves
`python -m optdoc` and delegates to the same function.
"""

from __future__ import annotations

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
