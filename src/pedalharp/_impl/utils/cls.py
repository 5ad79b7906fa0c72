__all__ = ["noInstance"]


def noInstance[T](cls: type[T]) -> type[T]:
    """
    Marks a class as a namespace of constants or static functions that must not be
    instantiated.
    """

    def __init__(self, *args, **kwargs):
        raise TypeError(f"{cls.__name__} is not intended to be instantiated")

    cls.__init__ = __init__
    return cls
