import sys

from update_client.main import main

sys.exit(main())
