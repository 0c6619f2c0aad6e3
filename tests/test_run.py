import pytest

from gauss_kmeans.run import build_parser, main, run_session


def test_session_prints_report(capsys):
    args = build_parser().parse_args(["--sample-size", "40", "--seed", "3"])
    main_result, comparisons = run_session(args)

    out = capsys.readouterr().out
    assert "Initial overlap:" in out
    assert "K-MEANS (k=3)" in out
    assert "COMPARISON (k=2)" in out
    assert "COMPARISON (k=4)" in out
    assert out.count("Best split: k=") == 2

    assert main_result.k == 3
    assert len(main_result.assignments) == 120
    assert [c.alternative_k for c in comparisons] == [2, 4]
    assert all(c.recommended_k in (3, c.alternative_k) for c in comparisons)


def test_session_with_perturbations_sweep_and_plots(tmp_path, capsys):
    plots = tmp_path / "plots"
    args = build_parser().parse_args([
        "--sample-size", "20",
        "--seed", "1",
        "--move", "blue:right:5",
        "--explode", "red",
        "--alt-k", "2",
        "--sweep", "5",
        "--plots", str(plots),
    ])
    run_session(args)

    out = capsys.readouterr().out
    assert "K SWEEP" in out
    assert "Elbow k:" in out
    assert (plots / "distributions.png").exists()
    assert (plots / "kmeans_k3.png").exists()
    assert (plots / "elbow.png").exists()


def test_invalid_move_spec_is_rejected():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--move", "blue:sideways"])


@pytest.mark.parametrize("argv", [
    ["--sample-size", "0"],
    ["--sample-size", "1", "--k", "5"],
    ["--explode", "purple"],
    ["--sweep", "0"],
    ["--sweep", "-1"],
])
def test_invalid_input_exits(argv):
    with pytest.raises(SystemExit):
        main(argv)


def test_session_rejects_non_positive_sweep():
    args = build_parser().parse_args(["--sample-size", "10", "--seed", "0", "--alt-k", "2"])
    args.sweep = -1
    with pytest.raises(ValueError, match="--sweep"):
        run_session(args)
