import sys

from .runtime.runner import main

sys.exit(main())
