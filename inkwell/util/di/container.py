"""Production container assembly."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from inkwell.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Container with the production variant of every component."""
    return make_async_container(
        *(get_provider(base)() for base in PROVIDERS),
        FastapiProvider(),
    )


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container so routes can resolve ``FromDishka`` params."""
    setup_dishka(container, app)
