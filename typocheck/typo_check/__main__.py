from __future__ import annotations

from .typo_check import main

raise SystemExit(main())
