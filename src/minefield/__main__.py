"""Run the minefield command line: `python -m minefield ROWS COLS [options]`."""

from sys import exit

from minefield import main

exit(main())
