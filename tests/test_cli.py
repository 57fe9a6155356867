from cid_to_contenthash import main

CIDV0 = "QmRAQB6YaCyidP37UdDnjFY5vQuiBrcqdyoW1CuDgwxkD4"
CIDV0_AS_V1 = "bafybeibj6lixxzqtsb45ysdjnupvqkufgdvzqbnvmhw2kf7cfkesy7r7d4"
CONTENT_HASH = "0xe3010170122029f2d17be6139079dc48696d1f582a8530eb9805b561eda517e22a892c7e3f1f"


def test_encode(capsys):
    assert main([CIDV0]) == 0
    assert capsys.readouterr().out == CONTENT_HASH + "\n"


def test_encode_many(capsys):
    assert main([CIDV0, CIDV0_AS_V1]) == 0
    assert capsys.readouterr().out.splitlines() == [CONTENT_HASH, CONTENT_HASH]


def test_empty_argument_prints_sentinel(capsys):
    assert main([""]) == 0
    assert capsys.readouterr().out == "0x\n"


def test_decode(capsys):
    assert main(["--decode", CONTENT_HASH]) == 0
    assert capsys.readouterr().out == CIDV0_AS_V1 + "\n"


def test_breakdown(capsys):
    assert main(["--breakdown", CIDV0]) == 0
    out = capsys.readouterr().out
    assert out.startswith(CONTENT_HASH + "\n")
    assert "Codec            : 0x70  (dag-pb)" in out


def test_error_goes_to_stderr(capsys):
    assert main(["invalid"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error: ")
