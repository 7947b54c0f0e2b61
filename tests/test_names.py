import pytest

from sdstatus.status.names import (
    UNIT_TYPE_SUFFIXES,
    is_valid_unit_name,
    normalize_unit_name,
)


@pytest.mark.parametrize('suffix', UNIT_TYPE_SUFFIXES)
def test_names_with_suffix_are_unchanged(suffix):
    name = f'foo-bar@1{suffix}'
    assert is_valid_unit_name(name)
    assert normalize_unit_name(name) == name


@pytest.mark.parametrize('name', [
    'nginx',
    'getty@tty1',
    'foo.conf',
    'my.app',
    'service',
])
def test_names_without_suffix_become_services(name):
    assert not is_valid_unit_name(name)
    assert normalize_unit_name(name) == f'{name}.service'


def test_suffix_must_be_at_the_end():
    assert normalize_unit_name('foo.timer.d') == 'foo.timer.d.service'
