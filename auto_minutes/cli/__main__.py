"""Allow ``python -m auto_minutes.cli`` execution."""

from auto_minutes.cli.minutes import main

main()
