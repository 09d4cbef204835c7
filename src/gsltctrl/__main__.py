import sys

from gsltctrl.main import main

sys.exit(main())
