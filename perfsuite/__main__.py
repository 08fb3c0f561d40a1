"""`python -m perfsuite` のエントリポイント."""

from perfsuite.cli.perfsuite import main

if __name__ == "__main__":
    raise SystemExit(main())
