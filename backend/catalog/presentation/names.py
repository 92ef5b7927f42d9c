def split_package_name(name: str) -> tuple[str, str]:
    """
    Split a package name into its scope (with trailing slash) and short name.

    Only the first slash separates the scope, so "@a/b/c" gives ("@a/", "b/c").
    Unscoped names give an empty scope.
    """
    scope, slash, short_name = name.partition("/")
    if not slash:
        return "", name
    return f"{scope}/", short_name
