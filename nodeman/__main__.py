import sys

from nodeman.main import main

sys.exit(main())
