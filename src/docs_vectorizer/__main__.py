import sys

from docs_vectorizer.cli import main

sys.exit(main())
