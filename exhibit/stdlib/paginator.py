"""Page/offset arithmetic for paginated searches."""


class Paginator:
    def __init__(self, per_page: int = 25):
        self._current_page = 1
        self._per_page = max(1, int(per_page))

    def set_current_page(self, page: int) -> None:
        self._current_page = max(1, int(page))

    def get_current_page(self) -> int:
        return self._current_page

    def set_per_page(self, per_page: int) -> None:
        self._per_page = max(1, int(per_page))

    def get_per_page(self) -> int:
        return self._per_page

    def get_offset(self) -> int:
        return (self._current_page - 1) * self._per_page


def paginator_factory(services):
    return Paginator(per_page=services.config.get("pagination", {}).get("per_page", 25))
