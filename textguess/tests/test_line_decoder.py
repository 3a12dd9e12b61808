import codecs
import logging
import unittest

import pytest

from textguess.exceptions import ConfigError, SampleDecodeError
from textguess.text.file_input import ListFileInput
from textguess.text.line_decoder import LineDecoder, decoding_charset
from textguess.text.newline import LineDelimiter

logger = logging.getLogger(__name__)

tc = unittest.TestCase()


def _decode(
    sample: bytes,
    charset: str = "utf-8",
    line_delimiter_recognized: LineDelimiter | None = None,
) -> list[str]:
    with LineDecoder.of(
        ListFileInput.of_sample(sample), charset, line_delimiter_recognized
    ) as decoder:
        tc.assertTrue(decoder.next_file())
        return list(decoder)


##############
# File input #
##############


def test_list_file_input_walks_files_and_chunks() -> None:
    file_input = ListFileInput([[b"a", b"b"], [], [b"c"]])

    tc.assertIsNone(file_input.poll())
    tc.assertTrue(file_input.next_file())
    tc.assertEqual(b"a", file_input.poll())
    tc.assertEqual(b"b", file_input.poll())
    tc.assertIsNone(file_input.poll())
    tc.assertTrue(file_input.next_file())
    tc.assertIsNone(file_input.poll())
    tc.assertTrue(file_input.next_file())
    tc.assertEqual(b"c", file_input.poll())
    tc.assertFalse(file_input.next_file())


def test_list_file_input_of_sample_and_close() -> None:
    with ListFileInput.of_sample(b"sample") as file_input:
        tc.assertTrue(file_input.next_file())
        tc.assertEqual(b"sample", file_input.poll())
    tc.assertFalse(file_input.next_file())


##############
# Delimiters #
##############


def test_lf_only_splits_on_lf() -> None:
    tc.assertEqual(["a", "b\r", "c"], _decode(b"a\nb\r\nc", "utf-8", LineDelimiter.LF))


def test_cr_only_splits_on_cr() -> None:
    tc.assertEqual(["a", "b\nc"], _decode(b"a\rb\nc", "utf-8", LineDelimiter.CR))


def test_crlf_only_splits_on_crlf() -> None:
    tc.assertEqual(
        ["a", "b\nc", "d\r"], _decode(b"a\r\nb\nc\r\nd\r", "utf-8", LineDelimiter.CRLF)
    )


def test_no_delimiter_splits_on_any_terminator() -> None:
    tc.assertEqual(["a", "b", "c", "d"], _decode(b"a\r\nb\rc\nd"))


def test_trailing_terminator_adds_no_empty_line() -> None:
    tc.assertEqual(["a", "b"], _decode(b"a\nb\n", "utf-8", LineDelimiter.LF))
    tc.assertEqual(["a", ""], _decode(b"a\n\n", "utf-8", LineDelimiter.LF))


def test_empty_lines_are_kept() -> None:
    tc.assertEqual(["", "", "a"], _decode(b"\n\na", "utf-8", LineDelimiter.LF))


def test_empty_sample_has_no_lines() -> None:
    tc.assertEqual([], _decode(b"", "utf-8", LineDelimiter.LF))
    tc.assertEqual([], _decode(b""))


def test_cr_at_chunk_end_waits_for_the_next_chunk() -> None:
    def decode_chunks(chunks: list[bytes]) -> list[str]:
        with LineDecoder(ListFileInput([chunks]), "utf-8") as decoder:
            decoder.next_file()
            return list(decoder)

    tc.assertEqual(["a", "b"], decode_chunks([b"a\r", b"\nb"]))
    tc.assertEqual(["a", "b"], decode_chunks([b"a\r", b"b"]))
    tc.assertEqual(["a"], decode_chunks([b"a\r"]))


############
# Charsets #
############


def test_multibyte_character_split_across_chunks() -> None:
    encoded = "é".encode("utf-8")
    file_input = ListFileInput([[encoded[:1], encoded[1:] + b"\nz"]])

    with LineDecoder(file_input, "utf-8", LineDelimiter.LF) as decoder:
        decoder.next_file()
        tc.assertEqual(["é", "z"], list(decoder))


def test_utf16_terminators_are_found_in_decoded_text() -> None:
    # U+0A0A encodes to 0x0A 0x0A in UTF-16LE
    sample = "\u0a0ax\ny".encode("utf-16-le")

    tc.assertEqual(["\u0a0ax", "y"], _decode(sample, "utf-16-le", LineDelimiter.LF))


def test_utf16_without_byte_order_mark_is_big_endian() -> None:
    sample = "a\nb".encode("utf-16-be")

    tc.assertEqual(["a", "b"], _decode(sample, "utf-16", LineDelimiter.LF))
    tc.assertEqual(["a", "b"], _decode(sample, "UTF-16"))


def test_utf16_byte_order_mark_selects_endianness() -> None:
    sample = "a\nb".encode("utf-16")  # native order with a mark

    tc.assertEqual(["a", "b"], _decode(sample, "utf-16", LineDelimiter.LF))
    tc.assertEqual(
        ["a", "b"],
        _decode(codecs.BOM_UTF16_LE + "a\nb".encode("utf-16-le"), "utf-16"),
    )


def test_utf32_without_byte_order_mark_is_big_endian() -> None:
    tc.assertEqual(["a"], _decode(b"\x00\x00\x00a", "utf-32"))


def test_byte_order_mark_split_across_chunks() -> None:
    data = codecs.BOM_UTF16_LE + "x\ny".encode("utf-16-le")
    file_input = ListFileInput([[data[:1], data[1:3], data[3:]]])

    with LineDecoder(file_input, "utf-16", LineDelimiter.LF) as decoder:
        decoder.next_file()
        tc.assertEqual(["x", "y"], list(decoder))


def test_decoding_charset() -> None:
    tc.assertEqual("utf-16-be", decoding_charset("UTF-16", b"\x00a"))
    tc.assertEqual("utf-16", decoding_charset("UTF-16", codecs.BOM_UTF16_BE + b"\x00a"))
    tc.assertEqual("utf-32-be", decoding_charset("UTF-32", b""))
    tc.assertEqual("utf-8", decoding_charset("UTF-8", b"a"))


def test_codec_refusing_the_error_policy_raises_sample_decode_error() -> None:
    # the idna codec only supports errors="strict"
    with LineDecoder(
        ListFileInput.of_sample(b"example\n"), "idna", LineDelimiter.LF
    ) as decoder:
        decoder.next_file()
        with pytest.raises(SampleDecodeError) as exc_info:
            list(decoder)
    tc.assertIsInstance(exc_info.value.__cause__, UnicodeError)


def test_shift_jis_lines() -> None:
    sample = "こんにちは\r\n世界".encode("shift_jis")

    tc.assertEqual(
        ["こんにちは", "世界"], _decode(sample, "shift_jis", LineDelimiter.CRLF)
    )


def test_utf8_byte_order_mark_is_dropped() -> None:
    tc.assertEqual(["a", "b"], _decode(b"\xef\xbb\xbfa\nb", "utf-8", LineDelimiter.LF))


def test_malformed_bytes_are_replaced_by_default() -> None:
    tc.assertEqual(["a\ufffdb"], _decode(b"a\xffb", "utf-8", LineDelimiter.LF))


def test_strict_policy_raises_sample_decode_error() -> None:
    with LineDecoder(
        ListFileInput.of_sample(b"ok\nbad\xff"), "utf-8", LineDelimiter.LF, errors="strict"
    ) as decoder:
        decoder.next_file()
        with pytest.raises(SampleDecodeError) as exc_info:
            list(decoder)
    tc.assertIsInstance(exc_info.value.__cause__, UnicodeDecodeError)


def test_unknown_charset_is_a_config_error() -> None:
    with pytest.raises(ConfigError):
        LineDecoder(ListFileInput.of_sample(b""), "NOT-A-CHARSET")


#########
# Files #
#########


def test_next_file_is_false_without_files() -> None:
    decoder = LineDecoder(ListFileInput([]), "utf-8", LineDelimiter.LF)

    tc.assertIsNone(decoder.poll())
    tc.assertFalse(decoder.next_file())
    tc.assertIsNone(decoder.poll())


def test_lines_are_read_per_file() -> None:
    file_input = ListFileInput([[b"a\nb"], [b"\xef\xbb\xbfc\n"]])

    with LineDecoder.of(file_input, "utf-8", LineDelimiter.LF) as decoder:
        tc.assertEqual("utf-8", decoder.charset)
        tc.assertEqual(LineDelimiter.LF, decoder.line_delimiter_recognized)
        tc.assertTrue(decoder.next_file())
        tc.assertEqual("a", decoder.poll())
        tc.assertEqual("b", decoder.poll())
        tc.assertIsNone(decoder.poll())
        tc.assertTrue(decoder.next_file())
        tc.assertEqual(["c"], list(decoder))
        tc.assertFalse(decoder.next_file())


def test_close_releases_the_input() -> None:
    decoder = LineDecoder(ListFileInput.of_sample(b"a"), "utf-8")
    decoder.close()

    tc.assertFalse(decoder.next_file())
    tc.assertIsNone(decoder.poll())
