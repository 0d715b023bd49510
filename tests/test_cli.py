from minefield import main


def test_generate_board(capsys):
    assert main(["3", "4", "--mines", "2", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "Board 3x4 with 2 mines:" in out
    assert "x | 0 1 2 3" in out


def test_search_and_hints(capsys):
    args = ["5", "5", "--mines", "2", "--seed", "3", "--start", "0", "0", "--attempts", "100"]
    assert main([*args, "--hints", "--verbose"]) == 0
    out = capsys.readouterr().out
    assert "Found a solvable board" in out
    assert "Solvable from (0, 0): True" in out
    assert "Board after the first move:" in out


def test_invalid_mine_count(capsys):
    assert main(["2", "2", "--mines", "9"]) == 2
    assert "Error:" in capsys.readouterr().err
