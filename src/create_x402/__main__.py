import sys

from create_x402.cli.main import main

sys.exit(main())
