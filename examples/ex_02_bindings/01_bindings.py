"""Global bindings and singletons.

``bind`` points an interface at an implementation (a class or a factory that
receives the container). ``singleton`` makes every dependant share one instance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from wirebox import Container, IContainer


class Storage(ABC):
    @abstractmethod
    def name(self) -> str: ...


class S3Storage(Storage):
    def name(self) -> str:
        return "s3"


class Settings:
    def __init__(self, bucket: str = "uploads") -> None:
        self.bucket = bucket


class Uploader:
    def __init__(self, storage: Storage, settings: Settings) -> None:
        self.storage = storage
        self.settings = settings


class Reporter:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings


def make_settings(container: IContainer) -> Settings:
    return Settings(bucket="reports")


def main() -> None:
    container = Container()
    container.bind(Storage, S3Storage)
    container.singleton(Settings, make_settings)

    uploader = container.create(Uploader)
    reporter = container.create(Reporter)

    print(f"storage={uploader.storage.name()}")  # => storage=s3
    print(f"bucket={uploader.settings.bucket}")  # => bucket=reports
    print(f"shared_settings={uploader.settings is reporter.settings}")  # => shared_settings=True


if __name__ == "__main__":
    main()
