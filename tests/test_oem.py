from cloudinit.file import File
from cloudinit.oem import OEM


def test_empty_oem_gives_no_file():
    assert OEM().file() is None


def test_oem_file():
    oem = OEM(
        id="examplecloud",
        name="Example Cloud Servers",
        version_id="168.0.0",
        home_url="https://www.example.com/cloud/servers/",
        bug_report_url="https://bugs.example.com/overlay",
    )
    expected = File(
        path="etc/oem-release",
        raw_file_permissions="0644",
        content=(
            "ID=examplecloud\n"
            "VERSION_ID=168.0.0\n"
            'NAME="Example Cloud Servers"\n'
            'HOME_URL="https://www.example.com/cloud/servers/"\n'
            'BUG_REPORT_URL="https://bugs.example.com/overlay"\n'
        ),
    )
    assert oem.file() == expected


def test_oem_quotes_are_escaped():
    file = OEM(id="x", name='say "hi"\tnow').file()
    assert 'NAME="say \\"hi\\"\\tnow"\n' in file.content
    assert file.content.startswith("ID=x\nVERSION_ID=\n")