def test_import() -> None:
    import treegen
    from treegen import __version__
    assert isinstance(__version__, str)


def test_public_api() -> None:
    import treegen
    result = treegen.generate({"depth": 1, "seed": 3})
    assert len(result.tree) >= 1
