class DataImportInfrastructureError(Exception):
    pass


class DataSourceError(DataImportInfrastructureError):
    pass


class DataSourceNotFoundError(DataSourceError):
    pass


class DataParseError(DataSourceError):
    pass
