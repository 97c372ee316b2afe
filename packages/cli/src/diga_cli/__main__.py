"""Allow ``python -m diga_cli``."""

from diga_cli.main import main

main()
