"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class CatalogError(ServiceError):
    pass


class NotFoundError(CatalogError):
    pass


class ListingError(CatalogError):
    pass


class DetailFetchError(CatalogError):
    pass


class NoMatchError(CatalogError):
    pass
