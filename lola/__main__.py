import sys

from lola.main import main

sys.exit(main())
