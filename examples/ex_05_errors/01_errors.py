"""Resolution errors.

Any failure anywhere in the dependency tree aborts the whole ``create`` call
with the first error met. All resolution failures share
``WireboxResolutionError`` as a base class.
"""

from __future__ import annotations

from wirebox import (
    Container,
    WireboxResolutionError,
    WireboxUnknownTypeError,
    WireboxUnresolvableParameterError,
)


class ApiClient:
    def __init__(self, base_url: str, timeout: float = 5.0) -> None:
        self.base_url = base_url
        self.timeout = timeout


class Gateway:
    def __init__(self, client: ApiClient) -> None:
        self.client = client


def main() -> None:
    container = Container()

    try:
        container.create(Gateway)
    except WireboxUnresolvableParameterError as error:
        print(f"missing_parameter={error.parameter}")  # => missing_parameter=base_url
        print(f"is_resolution_error={isinstance(error, WireboxResolutionError)}")  # => is_resolution_error=True

    try:
        container.create("billing.Invoice")
    except WireboxUnknownTypeError as error:
        print(f"unknown_type={error.name}")  # => unknown_type=billing.Invoice

    container.when(ApiClient).needs("$base_url").give("https://api.example.com")
    gateway = container.create(Gateway)
    print(f"timeout={gateway.client.timeout}")  # => timeout=5.0


if __name__ == "__main__":
    main()
