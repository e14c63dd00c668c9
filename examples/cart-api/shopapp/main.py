import logging

from fastapi import FastAPI
from pico_ioc import configuration, init, YamlTreeSource


def create_app() -> FastAPI:
    config = configuration(YamlTreeSource("application.yaml"))

    container = init(
        modules=[
            "pico_cart.config",
            "pico_cart.store",
            "pico_cart.factory",
        ],
        config=config,
    )

    return container.get(FastAPI)


app = create_app()

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)

    uvicorn.run(app, host="0.0.0.0", port=8000)
