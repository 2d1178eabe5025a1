import sys

from intcalc.console import main

sys.exit(main())
