import pytest

from borgmoea.foundation.registry import Registry


def test_register_and_lookup():
    reg: Registry[int] = Registry("Numbers")
    reg.register("one", 1)
    assert reg["one"] == 1
    assert "one" in reg
    assert len(reg) == 1
    assert reg.name == "Numbers"
    assert dict(reg.items()) == {"one": 1}


def test_register_as_decorator():
    reg: Registry = Registry("Funcs")

    @reg.register("double")
    def double(x):
        return 2 * x

    assert reg.get("double")(3) == 6
    assert list(reg) == ["double"]


def test_duplicate_key_requires_override():
    reg: Registry[int] = Registry()
    reg.register("a", 1)
    with pytest.raises(ValueError, match="already exists"):
        reg.register("a", 2)
    reg.register("a", 2, override=True)
    assert reg["a"] == 2


def test_missing_key():
    reg: Registry[int] = Registry("Empty")
    with pytest.raises(KeyError):
        reg["missing"]
    assert reg.get("missing", None) is None


def test_list_is_sorted():
    reg: Registry[int] = Registry()
    for key in ("c", "a", "b"):
        reg.register(key, 0)
    assert reg.list() == ["a", "b", "c"]
