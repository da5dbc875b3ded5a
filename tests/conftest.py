import io
import sys
import textwrap

import pytest
from PIL import Image

from app.core.config import Settings

# Stand-in for yt-dlp. Behaviour is picked by the last path segment of the
# URL; every invocation appends its argv to the log file next to the script.
FAKE_RESOLVER_SOURCE = textwrap.dedent('''
    import json
    import os
    import sys
    import time

    args = sys.argv[1:]
    url = args[-1]
    with open(os.path.join(os.path.dirname(__file__), "invocations.log"), "a") as log:
        log.write(" ".join(args) + "\\n")

    if url.endswith("/fail"):
        sys.stderr.write("ERROR: Unsupported URL: " + url)
        sys.exit(1)
    if url.endswith("/empty"):
        sys.exit(0)
    if url.endswith("/garbage"):
        print("this is not json")
        sys.exit(0)
    if url.endswith("/slow"):
        time.sleep(30)
    if url.endswith("/large"):
        formats = [{"url": "http://x/%d" % i, "format": "%dp" % i} for i in range(5000)]
        print(json.dumps({"title": "Large", "formats": formats}))
        sys.exit(0)

    print(json.dumps({
        "title": "Cat Video",
        "duration": 125.7,
        "categories": ["Pets"],
        "formats": [{"url": "http://x/1", "format": "360p"}, {"url": "http://x/2"}],
    }))
''')


class FakeResolver:
    def __init__(self, directory):
        self.script = directory / "fake_resolver.py"
        self.script.write_text(FAKE_RESOLVER_SOURCE)
        self.log = directory / "invocations.log"

    @property
    def command(self):
        return [sys.executable, str(self.script)]

    def invocations(self):
        if not self.log.exists():
            return []
        return self.log.read_text().splitlines()


@pytest.fixture
def fake_resolver(tmp_path):
    directory = tmp_path / "resolver"
    directory.mkdir()
    return FakeResolver(directory)


@pytest.fixture
def test_settings(tmp_path, fake_resolver):
    return Settings(
        upload_dir=str(tmp_path / "uploads"),
        log_to_file=False,
        resolver_command=fake_resolver.command,
        resolver_timeout_seconds=10.0,
        _env_file=None,
    )


@pytest.fixture
def png_bytes():
    buffer = io.BytesIO()
    Image.new("RGBA", (32, 32), (255, 0, 0, 128)).save(buffer, format="PNG")
    return buffer.getvalue()
