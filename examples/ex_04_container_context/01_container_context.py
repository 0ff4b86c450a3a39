"""Ambient container access through ``container_context``.

Set the container once at bootstrap; code without access to it can fetch it
with ``get_instance``. Reading before setting raises an error.
"""

from __future__ import annotations

from wirebox import (
    Container,
    WireboxContainerNotInitializedError,
    container_context,
)


class Greeter:
    def greet(self) -> str:
        return "hello"


def handler() -> str:
    container = container_context.get_instance()
    return container.create(Greeter).greet()


def main() -> None:
    try:
        handler()
    except WireboxContainerNotInitializedError as error:
        print(f"before_set={type(error).__name__}")  # => before_set=WireboxContainerNotInitializedError

    container_context.set_instance(Container())

    print(f"after_set={handler()}")  # => after_set=hello


if __name__ == "__main__":
    main()
