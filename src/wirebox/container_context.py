from __future__ import annotations

from wirebox.container_interface import IContainer
from wirebox.exceptions import WireboxContainerNotInitializedError


class ContainerContext:
    """Holder of one shared container for code that needs ambient access.

    The binding is process-global for this ``ContainerContext`` instance.
    It is not task-local or thread-local. Prefer passing the container
    explicitly; the module-level ``container_context`` is the only global
    wirebox keeps.
    """

    def __init__(self) -> None:
        self._container: IContainer | None = None

    def set_instance(self, container: IContainer) -> None:
        """Set the shared container, replacing any previous one.

        This method is expected to be called once during application bootstrap.
        """
        self._container = container

    def get_instance(self) -> IContainer:
        """Return the shared container or raise when none has been set."""
        if self._container is None:
            msg = (
                "Container instance is not set. "
                "Call container_context.set_instance(container) during startup."
            )
            raise WireboxContainerNotInitializedError(msg)
        return self._container


container_context = ContainerContext()


def set_instance(container: IContainer) -> None:
    """Set the container shared through ``container_context``."""
    container_context.set_instance(container)


def get_instance() -> IContainer:
    """Return the container shared through ``container_context``."""
    return container_context.get_instance()
