import pytest

from apikit.sdkgen.naming import split_words, to_camel_case, to_pascal_case, to_snake_case

CASES = [
    ("balance_service", "BalanceService", "balanceService", "balance_service"),
    ("getBalances", "GetBalances", "getBalances", "get_balances"),
    ("HTTPClient", "HTTPClient", "httpClient", "http_client"),
    ("apiKey", "APIKey", "apiKey", "api_key"),
    ("id", "ID", "id", "id"),
    ("user_id", "UserID", "userID", "user_id"),
]


@pytest.mark.parametrize("text,pascal,camel,snake", CASES)
def test_naming(text, pascal, camel, snake):
    assert to_pascal_case(text) == pascal
    assert to_camel_case(text) == camel
    assert to_snake_case(text) == snake


def test_split_words_camel_boundary_with_initialism():
    assert split_words("HTTPClient") == ["HTTP", "Client"]


def test_split_words_separators():
    assert split_words("a-b c.d_e") == ["a", "b", "c", "d", "e"]


def test_empty_strings():
    assert to_pascal_case("") == ""
    assert to_camel_case("") == ""
    assert to_snake_case("") == ""
    assert split_words("") == []


def test_single_character_camel():
    assert to_camel_case("x") == "x"


def test_snake_replaces_hyphen_and_space():
    assert to_snake_case("get-all items") == "get_all_items"


def test_pascal_display_name():
    assert to_pascal_case("pokemon") == "Pokemon"