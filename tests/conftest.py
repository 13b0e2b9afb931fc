import io
import os
import tarfile

import pytest
from pyfakefs.fake_filesystem_unittest import Patcher


@pytest.fixture
def fs():
    with Patcher() as patcher:
        yield patcher.fs


def build_archive(archive_path, entries, root="my-template-master"):
    """
    Write a gzipped tarball shaped like a repository download.

    ``entries`` maps paths below ``root`` to file content; None makes a
    directory entry.
    """
    with tarfile.open(archive_path, "w:gz") as tar:
        for name, content in entries.items():
            info = tarfile.TarInfo(f"{root}/{name}")
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
                continue
            data = content.encode("utf-8") if isinstance(content, str) else content
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return archive_path


@pytest.fixture
def make_archive(tmp_path):
    def factory(entries, root="my-template-master", name="template.tar.gz"):
        return build_archive(tmp_path / name, entries, root)
    return factory


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("KICKSTART_"):
            monkeypatch.delenv(key)
    return home
