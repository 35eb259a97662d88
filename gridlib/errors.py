class GridLibError(Exception):
    pass