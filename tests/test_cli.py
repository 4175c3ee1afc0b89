import io
import json

import pytest

from krb5strength.cli import ProtocolError, main, read_request


def request(principal, password):
    return io.BytesIO(b"principal: %s\nnew-password: %s\nend\n" % (principal, password))


def test_read_request():
    principal, password = read_request(request(b"test@EXAMPLE.ORG", b"pass word: x"))
    assert principal == b"test@EXAMPLE.ORG"
    assert password == b"pass word: x"


@pytest.mark.parametrize("data", [
    b"",
    b"principal: test@EXAMPLE.ORG",
    b"user: test@EXAMPLE.ORG\nnew-password: x\nend\n",
    b"principal: test@EXAMPLE.ORG\nnew-password:x\nend\n",
    b"principal: test@EXAMPLE.ORG\nnew-password: x\n",
    b"principal: test@EXAMPLE.ORG\nnew-password: x\nstop\n",
])
def test_malformed_requests(data):
    with pytest.raises(ProtocolError):
        read_request(io.BytesIO(data))


def test_approved(wordlist, capsys):
    code = main(["--wordlist", wordlist], stdin=request(b"test@EXAMPLE.ORG", b"known good password"))
    out, err = capsys.readouterr()
    assert code == 0
    assert out == "APPROVED\n"


def test_rejected(wordlist, capsys):
    code = main(["test@EXAMPLE.ORG", "--wordlist", wordlist],
                stdin=request(b"test@EXAMPLE.ORG", b"bitterbane12"))
    out, err = capsys.readouterr()
    assert code == 0
    assert out == ""
    assert "Password found in list of common passwords" in err


def test_config_file_and_overrides(wordlist, tmp_path, capsys):
    config = tmp_path / "strength.json"
    config.write_text(json.dumps({"minimum_length": 30, "password_dictionary_set": wordlist}))

    assert main(["--config", str(config)], stdin=request(b"test@EXAMPLE.ORG", b"known good password")) == 0
    out, err = capsys.readouterr()
    assert "password is too short" in err

    assert main(["--config", str(config), "--minimum-length", "8"],
                stdin=request(b"test@EXAMPLE.ORG", b"known good password")) == 0
    out, err = capsys.readouterr()
    assert out == "APPROVED\n"


def test_require_flags(wordlist, capsys):
    code = main(["--wordlist", wordlist, "--require-non-letter"],
                stdin=request(b"test@EXAMPLE.ORG", b"known good password"))
    out, err = capsys.readouterr()
    assert code == 0
    assert "password is only letters and spaces" in err


def test_require_flags_can_be_turned_off(wordlist, tmp_path, capsys):
    config = tmp_path / "strength.json"
    config.write_text(json.dumps({"require_non_letter": True, "password_dictionary_set": wordlist}))

    assert main(["--config", str(config)], stdin=request(b"test@EXAMPLE.ORG", b"known good password")) == 0
    out, err = capsys.readouterr()
    assert "password is only letters and spaces" in err

    assert main(["--config", str(config), "--no-require-non-letter"],
                stdin=request(b"test@EXAMPLE.ORG", b"known good password")) == 0
    out, err = capsys.readouterr()
    assert out == "APPROVED\n"


def test_no_dictionary_is_an_error(capsys):
    code = main([], stdin=request(b"test@EXAMPLE.ORG", b"known good password"))
    out, err = capsys.readouterr()
    assert code == 1
    assert out == ""
    assert "password_dictionary not configured" in err


def test_malformed_input_is_an_error(wordlist, capsys):
    code = main(["--wordlist", wordlist], stdin=io.BytesIO(b"principal: test@EXAMPLE.ORG\n"))
    out, err = capsys.readouterr()
    assert code == 1
    assert "Cannot read new-password" in err
