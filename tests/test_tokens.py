"""Tests for token counting."""

import unittest
from unittest.mock import MagicMock, patch

from htmldoc.render import tokens


class TestCountTokens(unittest.TestCase):
    def test_empty_text_skips_encoder(self) -> None:
        with patch.object(tokens, "get_encoder") as get_encoder:
            self.assertEqual(tokens.count_tokens(""), 0)
        get_encoder.assert_not_called()

    def test_counts_encoded_tokens(self) -> None:
        encoder = MagicMock()
        encoder.encode.return_value = [1, 2, 3]
        with patch.object(tokens, "get_encoder", return_value=encoder):
            self.assertEqual(tokens.count_tokens("some markdown"), 3)
        encoder.encode.assert_called_once_with("some markdown")

    def test_encoder_is_loaded_once(self) -> None:
        with patch.object(tokens, "_encoder", None), patch("htmldoc.render.tokens.tiktoken.get_encoding") as get_encoding:
            first = tokens.get_encoder()
            second = tokens.get_encoder()
        self.assertIs(first, second)
        get_encoding.assert_called_once_with("cl100k_base")


if __name__ == "__main__":
    unittest.main()
