import pytest

from gitlab_runners.errors import GitLabError, InvalidIDError
from gitlab_runners.ids import parse_id, path_escape, path_id


def test_parse_id_int_and_str():
    assert parse_id(42) == "42"
    assert parse_id("group/project") == "group/project"


@pytest.mark.parametrize("bad", [None, 1.5, True, [1], {"id": 1}, "", "   "])
def test_parse_id_rejects(bad):
    with pytest.raises(InvalidIDError):
        parse_id(bad)


def test_invalid_id_is_value_error_and_gitlab_error():
    with pytest.raises(ValueError):
        parse_id(object())
    with pytest.raises(GitLabError):
        parse_id(object())


def test_path_escape_reserved_characters():
    assert path_escape("group/sub project") == "group%2Fsub%20project"
    assert path_escape("a?b#c&d") == "a%3Fb%23c%26d"


def test_path_id():
    assert path_id(7) == "7"
    assert path_id("my-group/my-project") == "my-group%2Fmy-project"
