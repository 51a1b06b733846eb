"""
Allow running evmlint as a module:

    python -m evmlint report <build.json> --results <results.json>

Delegates to evmlint.cli:main().
"""
import sys
from .cli import main

sys.exit(main())
