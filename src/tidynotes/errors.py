# SPDX-License-Identifier: GPL-3.0-or-later

from typing import NoReturn


class UnhandledVariantError(Exception):
    """A closed union gained a member that some consumer does not handle."""

    def __init__(self, value):
        super().__init__(f'Unhandled variant: {value!r}')
        self.value = value


def assert_never(value) -> NoReturn:
    raise UnhandledVariantError(value)
