"""Allow ``python -m sqlign``."""

from sqlign.cli import main

raise SystemExit(main())
