import pytest

from crossgen.compat import CompatibilitySettings
from crossgen.crossword import Crossword, CrosswordSettings, SizeConstraint, SizeLimit
from crossgen.errors import ConfigError
from crossgen.geometry import horizontal, vertical
from crossgen.placement import candidates_for


def sample_words():
    return [
        horizontal(-1, -1, "hello"),
        vertical(1, -1, "local"),
        horizontal(1, 1, "cat"),
        vertical(2, 1, "and"),
        vertical(3, 1, "toy"),
    ]


def test_candidates_for_horizontal_existing():
    cands = candidates_for(horizontal(0, 0, "hello"), "lol")
    # every 'l' of "lol" against every 'l' of "hello", plus the 'o' pair
    assert cands == {
        vertical(2, 0, "lol"),
        vertical(3, 0, "lol"),
        vertical(2, -2, "lol"),
        vertical(3, -2, "lol"),
        vertical(4, -1, "lol"),
    }


def test_candidates_for_vertical_existing():
    cands = candidates_for(vertical(5, 5, "cat"), "tea")
    assert cands == {horizontal(5, 7, "tea"), horizontal(3, 6, "tea")}


def test_candidates_for_no_shared_letters():
    assert candidates_for(horizontal(0, 0, "abc"), "xyz") == set()


def test_normalize():
    cw = Crossword(sample_words())
    assert cw.words() == sorted([
        horizontal(0, 0, "hello"),
        vertical(2, 0, "local"),
        horizontal(2, 2, "cat"),
        vertical(3, 2, "and"),
        vertical(4, 2, "toy"),
    ])


def test_normalize_is_idempotent():
    cw = Crossword(sample_words())
    before = cw.clone()
    cw.normalize()
    cw.normalize()
    assert cw == before
    assert min(w.x for w in cw) == 0
    assert min(w.y for w in cw) == 0


def test_normalize_uses_positions_not_extents():
    cw = Crossword([horizontal(3, 5, "abc"), vertical(4, 2, "xby")])
    assert cw.words() == [horizontal(0, 3, "abc"), vertical(1, 0, "xby")]


def test_add_word_ignores_duplicate_text():
    cw = Crossword([horizontal(0, 0, "hello")])
    cw.add_word(vertical(0, 0, "hello"))
    assert cw.words() == [horizontal(0, 0, "hello")]


def test_add_word_renormalizes():
    cw = Crossword([horizontal(0, 0, "hello")])
    cw.add_word(vertical(2, -3, "oval"))
    assert cw.find_word("hello") == horizontal(0, 3, "hello")
    assert cw.find_word("oval") == vertical(2, 0, "oval")


def test_remove_word():
    cw = Crossword(sample_words())
    cw.remove_word("toy")
    assert cw == Crossword([
        horizontal(0, 0, "hello"),
        vertical(2, 0, "local"),
        horizontal(2, 2, "cat"),
        vertical(3, 2, "and"),
    ])


def test_remove_and_find_absent_word():
    cw = Crossword(sample_words())
    before = cw.clone()
    cw.remove_word("zebra")
    assert cw == before
    assert cw.find_word("zebra") is None


def test_remove_renormalizes():
    cw = Crossword([horizontal(0, 2, "cat"), vertical(0, 0, "arc")])
    cw.remove_word("arc")
    assert cw.words() == [horizontal(0, 0, "cat")]


def test_contains_crossword():
    cw = Crossword(sample_words())
    same = Crossword(sample_words())
    shifted_part = Crossword([horizontal(2, 1, "cat"), vertical(3, 1, "and"), vertical(4, 1, "toy")])
    other_shape = Crossword([vertical(2, 2, "and"), vertical(3, 1, "toy")])

    assert cw.contains_crossword(same)
    assert cw.contains_crossword(shifted_part)
    assert not cw.contains_crossword(other_shape)
    assert not shifted_part.contains_crossword(cw)


def test_contains_crossword_is_reflexive():
    for cw in (Crossword(), Crossword(sample_words()), Crossword([vertical(0, 0, "a")])):
        assert cw.contains_crossword(cw)


def test_contains_crossword_requires_same_direction():
    assert not Crossword([horizontal(0, 0, "cat")]).contains_crossword(Crossword([vertical(0, 0, "cat")]))


def test_size():
    assert Crossword().size() == (0, 0)
    assert Crossword(sample_words()).size() == (5, 5)
    assert Crossword([vertical(0, 0, "abc")]).size() == (1, 3)


def test_render():
    cw = Crossword(sample_words())
    assert cw.render() == (
        "-----------\n"
        "|h e l l o|\n"
        "|    o    |\n"
        "|    c a t|\n"
        "|    a n o|\n"
        "|    l d y|\n"
        "-----------\n"
    )


def test_render_empty():
    assert Crossword().render() == "-\n-\n"


def test_possible_placements_seed():
    assert Crossword().calculate_possible_placements("word", CompatibilitySettings()) == {horizontal(0, 0, "word")}


def test_possible_placements():
    cw = Crossword([horizontal(0, 0, "hello"), vertical(2, 0, "local"), horizontal(0, 2, "tac")])
    assert cw.calculate_possible_placements("hatlo", CompatibilitySettings()) == {
        vertical(0, 0, "hatlo"),
        horizontal(-1, 4, "hatlo"),
        vertical(4, -4, "hatlo"),
    }


def test_possible_placements_unrelated_word():
    cw = Crossword([horizontal(0, 0, "abc")])
    assert cw.calculate_possible_placements("xyz", CompatibilitySettings()) == set()


def test_can_be_added():
    cw = Crossword([horizontal(0, 0, "hello")])
    settings = CompatibilitySettings()
    assert cw.can_be_added(vertical(4, -2, "too"), settings)
    assert cw.can_be_added(vertical(4, -1, "too"), settings)
    assert not cw.can_be_added(vertical(4, -1, "tea"), settings)  # 'e' over 'o'
    assert not cw.can_be_added(vertical(5, -2, "too"), settings)  # ends against the side of "hello"
    assert not cw.can_be_added(horizontal(1, 0, "ell"), settings)


def test_equality_hash_and_order_are_structural():
    a = Crossword(sample_words())
    b = Crossword(list(reversed(sample_words())))
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    smaller = Crossword([horizontal(0, 0, "abc")])
    assert sorted([a, smaller]) == sorted([smaller, a])
    assert (a < smaller) != (smaller < a)


def test_clone_is_independent():
    cw = Crossword(sample_words())
    copy = cw.clone()
    copy.remove_word("toy")
    assert cw.find_word("toy") is not None
    assert cw != copy


def test_dict_round_trip():
    cw = Crossword(sample_words())
    assert Crossword.from_dict(cw.to_dict()) == cw


def test_from_dict_rejects_garbage():
    with pytest.raises(ConfigError):
        Crossword.from_dict({"words": [{"x": 0, "y": 0, "direction": "D", "text": "abc"}]})
    with pytest.raises(ConfigError):
        Crossword.from_dict({})


def test_size_constraints():
    cw = Crossword(sample_words())
    assert (cw.width(), cw.height(), cw.area()) == (5, 5, 25)
    assert Crossword().area() == 0
    assert SizeConstraint.max_length(5).is_satisfied(cw)
    assert not SizeConstraint.max_length(4).is_satisfied(cw)
    assert SizeConstraint.max_height(5).is_satisfied(cw)
    assert not SizeConstraint.max_height(4).is_satisfied(cw)
    assert SizeConstraint.max_area(25).is_satisfied(cw)
    assert not SizeConstraint.max_area(24).is_satisfied(cw)
    assert SizeConstraint().is_satisfied(cw)

    settings = CrosswordSettings((SizeConstraint.max_length(5), SizeConstraint.max_area(20)))
    assert not settings.is_valid(cw)
    assert CrosswordSettings().is_valid(cw)


def test_size_constraint_dicts():
    assert SizeConstraint.max_area(12).to_dict() == {"max_area": 12}
    assert SizeConstraint.from_dict({"max_height": 3}) == SizeConstraint(SizeLimit.MAX_HEIGHT, 3)
    assert SizeConstraint.from_dict("none") == SizeConstraint()
    settings = CrosswordSettings((SizeConstraint.max_length(13), SizeConstraint()))
    assert CrosswordSettings.from_dict(settings.to_dict()) == settings


@pytest.mark.parametrize("raw", ["huge", {"max_width": 3}, {"max_length": -1}, {"max_length": "3"}, {"max_length": 1, "max_area": 2}])
def test_size_constraint_rejects_bad_input(raw):
    with pytest.raises(ConfigError):
        SizeConstraint.from_dict(raw)
