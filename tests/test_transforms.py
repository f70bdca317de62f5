"""Tests for the block transforms."""

from dep_sanitizer.models import Address, Block
from dep_sanitizer.rewriter.transforms import add_lines, remove_lines, sort_lines

UTIL = Address.from_str("src/scala/util:util")
JSON = Address.from_str("src/scala/models:json")
IO = Address.from_str("src/scala/io:io")


def _block(*lines, quote="'"):
    return Block(lines=sorted(set(lines)), quote=quote)


def test_remove_drops_matching_lines():
    block = _block("        'src/scala/util',", "        ':json',", "        '3rdparty/jvm:cats',")
    assert remove_lines(block, [UTIL, JSON], "#skip-sanitize") == ["        '3rdparty/jvm:cats',"]


def test_remove_keeps_skip_marked_lines():
    kept = "        'src/scala/util',  #keep-me"
    block = _block(kept, "        ':json',")
    assert remove_lines(block, [UTIL, JSON], "#keep-me") == [kept]


def test_remove_is_idempotent():
    block = _block("        'src/scala/util',", "        '3rdparty/jvm:cats',")
    once = remove_lines(block, [UTIL], "#skip-sanitize")
    twice = remove_lines(Block(lines=once), [UTIL], "#skip-sanitize")
    assert once == twice


def test_remove_with_empty_skip_marker_does_not_exempt_everything():
    block = _block("        'src/scala/util',")
    assert remove_lines(block, [UTIL], "") == []


def test_add_formats_quoted_indented_entry():
    block = _block("    '3rdparty/jvm:cats',")
    assert add_lines(block, [IO, JSON]) == [
        "    '3rdparty/jvm:cats',",
        "    'src/scala/io',",
        "    'src/scala/models:json',",
    ]


def test_add_uses_default_indent_and_block_quote():
    block = Block(lines=[], quote='"')
    assert add_lines(block, [IO]) == ['        "src/scala/io",']


def test_add_skips_already_referenced_dependencies():
    block = _block("        ':json',", "        'src/scala/util',")
    assert add_lines(block, [JSON, UTIL]) == block.lines


def test_add_twice_is_fixed_point():
    block = _block("        'src/scala/util',")
    once = sorted(set(add_lines(block, [IO])))
    twice = sorted(set(add_lines(Block(lines=once), [IO])))
    assert once == twice


def test_sort_is_identity():
    block = _block("b,", "a,")
    assert sort_lines(block) == ["a,", "b,"]
