"""End-to-end tests for decode / encode and the plain-Python wrappers."""

import math

import pytest

from plainyaml import (
    MalformedLine,
    Null,
    Options,
    ParseError,
    SerializeError,
    VBool,
    VFloat,
    VInt,
    VList,
    VMap,
    VText,
    decode,
    dumps,
    encode,
    loads,
)

LF = Options(eol="\n")

SAMPLES = [
    VMap({"name": VText("demo"), "debug": VBool(False), "ratio": VFloat(0.75)}),
    VList([VInt(1), VText("two"), Null, VBool(True)]),
    VMap({
        "server": VMap({
            "host": VText("localhost"),
            "ports": VList([VInt(80), VInt(443)]),
            "tls": VMap({"enabled": VBool(True), "cert": VText("/etc/ssl/a.pem")}),
        }),
        "owner": VText("ops"),
    }),
    VList([
        VMap({"id": VInt(1), "tags": VList([VText("a"), VText("b")])}),
        VList([VText("nested"), VList([VFloat(-1.5)])]),
        VText("tail"),
    ]),
    VMap({
        "literal": VText("line one\nline two\n"),
        "stripped": VText("no newline\nat end"),
        "kept": VText("keep\n\n"),
        "folded": VText(" ".join(["lorem ipsum dolor sit amet"] * 6)),
        "quoted": VText("value # not a comment"),
        "looks_bool": VText("true"),
        "looks_int": VText("007"),
        "empty": VText(""),
    }),
    VMap({"inf": VFloat(math.inf), "big": VInt(10 ** 20), "exp": VFloat(1.5e-9)}),
]


# ---------------------------------------------------------------------------
# Round-trip laws
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value", SAMPLES)
def test_round_trip(value):
    assert decode(encode(value, LF), LF) == value

@pytest.mark.parametrize("value", SAMPLES)
def test_idempotent_re_encode(value):
    once = encode(value, LF)
    assert encode(decode(once, LF), LF) == once

@pytest.mark.parametrize("indent", [2, 3, 8])
def test_round_trip_any_indent(indent):
    opts = Options(indent=indent, eol="\n")
    value = SAMPLES[2]
    assert decode(encode(value, opts), opts) == value

def test_round_trip_crlf():
    opts = Options(eol="\r\n")
    value = VMap({"t": VText("a\r\nb\r\n"), "l": VList([VInt(1)])})
    text = encode(value, opts)
    assert "\n" not in text.replace("\r\n", "")
    assert decode(text, opts) == value

@pytest.mark.parametrize("token, expected", [
    ("true", VBool(True)),
    ("~", Null),
    ("42", VInt(42)),
    ("3.14", VFloat(3.14)),
    ('"quoted"', VText("quoted")),
])
def test_scalar_coercion_totality(token, expected):
    first = decode(f"k: {token}", LF)
    assert first == VMap({"k": expected})
    assert decode(encode(first, LF), LF) == first

def test_folding_boundary_round_trips():
    for size in (75, 76, 200):
        text = ("ab " * 100)[:size].strip()
        text = text + "z" * (size - len(text))
        value = VMap({"t": VText(text)})
        assert decode(encode(value, LF), LF) == value


# ---------------------------------------------------------------------------
# Decode surface
# ---------------------------------------------------------------------------

def test_decode_bytes_default_utf8():
    assert decode("name: café".encode("utf-8"), LF) == VMap({"name": VText("café")})

def test_decode_bytes_with_encoding_hint():
    opts = Options(eol="\n", encoding="latin-1")
    assert decode("name: café".encode("latin-1"), opts) == VMap({"name": VText("café")})

def test_decode_bytes_invalid_encoding():
    with pytest.raises(ParseError, match="not valid utf-8"):
        decode(b"name: \xff\xfe", LF)

def test_decode_multibyte_indent_counts_characters():
    value = decode("ключ:\n  значение: 1", LF)
    assert value == VMap({"ключ": VMap({"значение": VInt(1)})})

def test_decode_empty():
    with pytest.raises(ParseError, match="empty document"):
        decode("", LF)

def test_decode_tab_second_line():
    with pytest.raises(MalformedLine):
        decode("a:\n\tb: 1", LF)

def test_decode_options_toggle_evaluation():
    opts = Options(eol="\n", evaluate_booleans=False, evaluate_nulls=False)
    assert decode("a: true\nb: ~", opts) == VMap({"a": VText("true"), "b": VText("~")})


# ---------------------------------------------------------------------------
# Encode surface and plain-Python wrappers
# ---------------------------------------------------------------------------

def test_encode_empty_container_fails():
    with pytest.raises(SerializeError):
        encode(VMap({"a": VList([])}), LF)

def test_encode_refuses_lossy_block():
    with pytest.raises(SerializeError):
        encode(VList([VText(".\n ")]), LF)

def test_inner_whitespace_row_round_trips():
    value = VList([VText("a\n  \nb\n")])
    assert decode(encode(value, LF), LF) == value

def test_empty_block_mid_document():
    assert decode("a: |\nb: 1", LF) == VMap({"a": VText(""), "b": VInt(1)})

def test_loads():
    text = "name: web\nports:\n  - 80\n  - 443\ntls:\n  on: true\n  cert: ~\n"
    assert loads(text, LF) == {
        "name": "web",
        "ports": [80, 443],
        "tls": {"on": True, "cert": None},
    }

def test_dumps_then_loads():
    data = {"a": [1, {"b": "x\ny\n"}], "c": None, "d": 2.5}
    assert loads(dumps(data, LF), LF) == data

def test_dumps_mixed_keys_rejected():
    with pytest.raises(SerializeError):
        dumps({"a": 1, 2: "b"}, LF)
