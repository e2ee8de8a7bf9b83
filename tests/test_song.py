from lyricdeck.song import Song


def bilingual_data():
    return {
        "source_skid": 1,
        "source_sequence_nbr": 294,
        "title_by_language_skid": {"1": "Amazing Grace", "2": "Sublime Gracia"},
        "sections": [
            [["Amazing grace", "Sublime gracia"], ["how sweet the sound", "del Salvador"]],
            [["Praise him", "Alabadle"]],
        ],
        "is_chorus": [False, True],
        "language_skids": [1, 2],
    }


def test_stanzas_interleave_languages():
    song = Song.from_data(bilingual_data())
    assert song.stanzas == [
        ["Amazing grace", "Sublime gracia", "how sweet the sound", "del Salvador"],
        ["Praise him", "Alabadle"],
    ]
    assert song.language_count == 2
    assert song.is_chorus == [False, True]
    assert not song.is_empty


def test_titles():
    song = Song.from_data(bilingual_data())
    assert song.title_by_language_skid == {1: "Amazing Grace", 2: "Sublime Gracia"}
    assert song.display_title == "Amazing Grace"
    assert song.title_line == "Amazing Grace / Sublime Gracia"
    assert song.get_title(2) == "Sublime Gracia"
    # unknown language falls back to the first one
    assert song.get_title(9) == "Amazing Grace"


def test_mismatched_chorus_flags_become_verses():
    data = bilingual_data()
    data["is_chorus"] = [True]
    song = Song.from_data(data)
    assert song.is_chorus == [False, False]


def test_empty_song():
    song = Song.from_data({"source_skid": 1, "source_sequence_nbr": 5})
    assert song.is_empty
    assert song.stanzas == []
    assert song.language_count == 1
    assert song.display_title == ""
    assert song.title_line == ""
