import pytest

from virt.color import RGB


def test_default_is_zero():
    assert RGB().is_zero()
    assert not RGB(0.0, 0.0, 0.1).is_zero()


def test_add_sub_round_trip():
    a = RGB(0.25, 0.5, 0.75)
    b = RGB(1.0, 2.0, 3.0)
    assert (a + b) - b == a


def test_iadd_mutates_in_place():
    a = RGB(1.0, 2.0, 3.0)
    alias = a
    a += RGB(1.0, 1.0, 1.0)
    assert alias is a
    assert a == RGB(2.0, 3.0, 4.0)


def test_componentwise_multiply_and_divide():
    a = RGB(0.5, 2.0, 4.0)
    b = RGB(2.0, 4.0, 8.0)
    assert (a * b) / b == a
    assert a * RGB(1.0, 1.0, 1.0) == a


def test_scalar_multiply_and_divide():
    a = RGB(0.5, 2.0, 4.0)
    assert 2 * a == a * 2
    assert (a * 8) / 8 == a


def test_divide_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        RGB(1.0, 1.0, 1.0) / 0


@pytest.mark.parametrize(
    "color, weight",
    [(RGB(1, 0, 0), 0.2126), (RGB(0, 1, 0), 0.7152), (RGB(0, 0, 1), 0.0722)],
)
def test_luminance_weights(color, weight):
    assert color.luminance() == pytest.approx(weight)


def test_luminance_is_linear():
    a = RGB(0.3, 0.6, 0.9)
    b = RGB(0.1, 0.2, 0.4)
    assert (a + b).luminance() == pytest.approx(a.luminance() + b.luminance())
    assert (a * 3).luminance() == pytest.approx(3 * a.luminance())