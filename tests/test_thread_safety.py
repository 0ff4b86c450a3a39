"""Tests for thread safety of Container."""

import threading
from concurrent.futures import ThreadPoolExecutor

from wirebox.container import Container
from wirebox.container_interface import IContainer


class ServiceA:
    pass


class ServiceB:
    def __init__(self, a: ServiceA) -> None:
        self.a = a


class TestConcurrentResolution:
    def test_concurrent_singleton_resolution_same_instance(self, container: Container) -> None:
        """Concurrent first access to a singleton builds it once."""
        calls: list[int] = []
        barrier = threading.Barrier(10)

        def make_service(c: IContainer) -> ServiceA:
            calls.append(1)
            return ServiceA()

        container.singleton(ServiceA, make_service)

        def resolve_service() -> ServiceA:
            barrier.wait()
            return container.create(ServiceA)

        with ThreadPoolExecutor(max_workers=10) as executor:
            results = list(executor.map(lambda _: resolve_service(), range(10)))

        assert calls == [1]
        assert all(result is results[0] for result in results)

    def test_concurrent_transient_resolution_different_instances(
        self,
        container: Container,
    ) -> None:
        """Concurrent autowired resolution creates distinct graphs."""
        with ThreadPoolExecutor(max_workers=10) as executor:
            results = list(executor.map(lambda _: container.create(ServiceB), range(10)))

        assert len({id(result) for result in results}) == 10
        assert len({id(result.a) for result in results}) == 10

    def test_concurrent_bindings_and_creates(self, container: Container) -> None:
        """Bindings written while other threads create do not corrupt the caches."""
        errors: list[Exception] = []

        def bind_and_create(index: int) -> None:
            try:
                container.when(ServiceB).needs(ServiceA).give(ServiceA)
                container.bind(f"alias_{index}", ServiceB)
                assert isinstance(container.create(f"alias_{index}"), ServiceB)
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=bind_and_create, args=(i,)) for i in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
