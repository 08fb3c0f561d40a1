"""perfsuite のコマンドラインインターフェース."""
