import os
import subprocess
import sys
from pathlib import Path

import pytest

torch = pytest.importorskip("torch")

REPO_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = REPO_ROOT / "src"


def _env_with_src() -> dict[str, str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_PATH)
    return env


def test_train_and_encode_workflow(tmp_path) -> None:
    dataset_path = tmp_path / "words.txt"
    dataset_path.write_text("airplane\nairport\nairline\nbanana\n", encoding="utf-8")
    log_path = tmp_path / "training.log"
    checkpoint_path = tmp_path / "encoder.pt"

    train_cmd = [
        sys.executable,
        "scripts/train_encoder.py",
        "--dataset",
        str(dataset_path),
        "--steps",
        "3",
        "--mode",
        "random",
        "--sample-pairs",
        "6",
        "--seed",
        "0",
        "--log-path",
        str(log_path),
        "--save-path",
        str(checkpoint_path),
    ]
    result = subprocess.run(
        train_cmd,
        cwd=REPO_ROOT,
        env=_env_with_src(),
        check=True,
        capture_output=True,
        text=True,
    )
    assert "final_cost:" in result.stdout
    assert checkpoint_path.exists()
    log_text = log_path.read_text(encoding="utf-8")
    assert log_text.count("Iteration:") == 3
    assert "Iteration: 1\n" in log_text
    assert "Iteration: 3\n" in log_text
    assert "Iteration: 0\n" not in log_text
    assert "was_modified:" in log_text

    encode_cmd = [
        sys.executable,
        "scripts/encode_string.py",
        "airplane",
        "--checkpoint",
        str(checkpoint_path),
    ]
    result = subprocess.run(
        encode_cmd,
        cwd=REPO_ROOT,
        env=_env_with_src(),
        check=True,
        capture_output=True,
        text=True,
    )
    values = result.stdout.strip().removeprefix("Encoded: ").split()
    assert len(values) == 10
    assert all(0.0 <= float(value) <= 1.0 for value in values)
