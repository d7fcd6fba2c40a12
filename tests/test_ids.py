from survey_api.services.ids import ALPHABET, generate_id


def test_alphabet_excludes_lookalikes():
    assert len(ALPHABET) == 58
    assert len(set(ALPHABET)) == 58
    for ch in "0OIl":
        assert ch not in ALPHABET


def test_generate_id_shape():
    value = generate_id()
    assert len(value) == 10
    assert set(value) <= set(ALPHABET)
    assert len(generate_id(4)) == 4


def test_generate_id_is_not_repeated():
    ids = {generate_id() for _ in range(2000)}
    assert len(ids) == 2000
