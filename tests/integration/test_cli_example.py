import json
import shutil
import subprocess
import sys
from pathlib import Path


def _replicate_examples(tmp_path: Path) -> Path:
    # Copy the sample CLI assets into an isolated workspace the subprocess can mutate.
    repo_root = Path(__file__).resolve().parents[2]
    examples_dir = repo_root / "examples"

    dest = tmp_path / "examples"
    dest.mkdir(parents=True, exist_ok=True)

    for name in ("solve_matching_example.py", "program3data.txt"):
        shutil.copy2(examples_dir / name, dest / name)

    # Provide src/ so the example script can import using its relative path logic.
    src_symlink = tmp_path / "src"
    src_origin = repo_root / "src"
    if not src_symlink.exists():
        src_symlink.symlink_to(src_origin, target_is_directory=True)

    return dest


def test_example_cli_script_prints_matching(tmp_path: Path):
    examples_dir = _replicate_examples(tmp_path)
    script_path = examples_dir / "solve_matching_example.py"
    output_path = examples_dir / "program3_solution.json"

    proc = subprocess.run(
        [sys.executable, str(script_path)],
        cwd=tmp_path,
        capture_output=True,
        text=True,
        check=True,
    )

    assert proc.stdout.splitlines() == [
        "Ana / Python",
        "Ben / Java",
        "Cara / Rust",
        "Dev / Scala",
        "4 total matches",
    ]
    assert proc.stderr == ""

    assert output_path.exists()
    contents = json.loads(output_path.read_text(encoding="utf-8"))
    assert contents["status"] == "optimal"
    assert contents["size"] == 4
    assert contents["phases"] == 2
    assert contents["distances"] == [3, 9]
    assert {"left": "Ben", "right": "Java"} in contents["pairs"]


def test_cli_fails_when_input_missing(tmp_path: Path):
    examples_dir = _replicate_examples(tmp_path)
    (examples_dir / "program3data.txt").unlink()

    proc = subprocess.run(
        [sys.executable, str(examples_dir / "solve_matching_example.py")],
        cwd=tmp_path,
        capture_output=True,
        text=True,
    )

    assert proc.returncode != 0
    assert "Cannot open program3data.txt file." in proc.stderr


def test_cli_fails_with_truncated_input(tmp_path: Path):
    # A truncated edge list should abort with a clear error.
    examples_dir = _replicate_examples(tmp_path)
    problem_path = examples_dir / "program3data.txt"
    problem_path.write_text("4\nA B\nX Y\n3\n1 3\n", encoding="utf-8")

    proc = subprocess.run(
        [sys.executable, str(examples_dir / "solve_matching_example.py")],
        cwd=tmp_path,
        capture_output=True,
        text=True,
    )

    assert proc.returncode != 0
    assert "Unexpected end of input" in proc.stderr
