from api.backend import BackendAPI

backend = BackendAPI()


def get_backend() -> BackendAPI:
    return backend
