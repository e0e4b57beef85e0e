class CollegeBrowserError(Exception):
    """Base exception for all college_browser errors"""
    pass

class ConfigError(CollegeBrowserError):
    """Invalid or inconsistent global.json or engine settings"""
    pass

class DatasetSchemaError(CollegeBrowserError):
    """
    Dataset file doesn't match what the record model expects
    top-level value is not a list, rows are not objects, duplicate ids, etc
    """
    pass

class EngineClosedError(CollegeBrowserError):
    """A mutator was called on a DataViewEngine after close()"""
    pass
