from note_gen.text import clip_text


def test_clip_text_collapses_whitespace() -> None:
    assert clip_text("  a \n b\t c  ", 20) == "a b c"


def test_clip_text_truncates_long_text() -> None:
    assert clip_text("abcdefghij", 4) == "abcd...(truncated)"
