"""Allow ``python -m catalyst``."""

from catalyst.cli import main

main()
