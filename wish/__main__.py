import sys

from wish.main import main


sys.exit(main())
