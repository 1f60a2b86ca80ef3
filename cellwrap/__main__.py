"""Module entrypoint for ``python -m cellwrap``.

All argument parsing happens in ``cellwrap.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
