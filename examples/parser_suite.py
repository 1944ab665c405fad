"""Example suite: run with ``scopecheck run examples/parser_suite.py``."""

import json

from scopecheck import check, require, section


def parse_pair(text):
    key, _, value = text.partition("=")
    return key.strip(), value.strip()


with section("Pairs"):
    require(parse_pair("a=1") == ("a", "1"))
    require(parse_pair(" b = 2 ") == ("b", "2"), "whitespace is trimmed")

    with section("Missing separator"):
        require(parse_pair("c") == ("c", ""))

with section("JSON"):
    payload = json.loads('{"items": [1, 2, 3]}')
    require("items" in payload)
    check(len(payload["items"]) == 3, "three items")
    require(lambda: sum(payload["items"]) == 6, "items sum to 6")

    with section("Empty document"):
        pass
