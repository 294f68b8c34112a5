"""Package entry point for ``python -m subtitle_vocab``.

WHY: Users run the extractor as ``python -m subtitle_vocab analyze
episode.srt``. Python's ``-m`` flag looks for ``__main__.py`` inside the
package and executes it.

HOW: Delegates to the CLI's main() and exits with its return code.
"""

import sys

if __name__ == "__main__":
    from subtitle_vocab.cli import main
    sys.exit(main())
