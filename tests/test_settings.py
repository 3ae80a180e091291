from protoact.settings import DEFAULT_VOLUME, EnvSetting


def test_missing_file_gives_defaults_and_is_written(tmp_path):
    path = tmp_path / "config.dat"
    setting = EnvSetting(path)
    assert setting.fps_visible is False
    assert setting.bgm_volume == 50
    assert setting.sound_volume == DEFAULT_VOLUME
    assert path.read_text() == "0\n50\n50\n"


def test_round_trip(tmp_path):
    path = tmp_path / "config.dat"
    setting = EnvSetting(path)
    setting.fps_visible = True
    setting.bgm_volume = 80
    setting.sound_volume = 15
    setting.save()
    loaded = EnvSetting(path)
    assert (loaded.fps_visible, loaded.bgm_volume, loaded.sound_volume) == (True, 80, 15)


def test_nonzero_fps_flag_is_true(tmp_path):
    path = tmp_path / "config.dat"
    path.write_text("7\n10\n20\n")
    setting = EnvSetting(path)
    assert setting.fps_visible is True
    assert setting.bgm_volume == 10


def test_garbage_and_short_file_read_as_zero(tmp_path):
    path = tmp_path / "config.dat"
    path.write_text("x\n")
    setting = EnvSetting(path)
    assert setting.fps_visible is False
    assert setting.bgm_volume == 0
    assert setting.sound_volume == 0


def test_load_rereads_changes(tmp_path):
    path = tmp_path / "config.dat"
    setting = EnvSetting(path)
    path.write_text("1\n33\n44\n")
    setting.load()
    assert (setting.fps_visible, setting.bgm_volume, setting.sound_volume) == (True, 33, 44)