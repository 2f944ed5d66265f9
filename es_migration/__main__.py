import sys

from es_migration.main import main

sys.exit(main())
