"""
CLI Tests
Tests for whitelist_cli (root / proof / verify / config commands)
"""
import json

import pytest

from whitelist_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    create_parser,
    main,
)
from whitelist_core.crypto.hashing import keccak256, sha256
from whitelist_core.merkle import build_tree


@pytest.fixture
def workdir(clean_env, tmp_path):
    """Run each CLI test in an empty directory with no WHITELIST_* env."""
    clean_env.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config_file(workdir, emails):
    path = workdir / "custom.yaml"
    path.write_text(
        "tree:\n"
        "  hash_algorithm: keccak256\n"
        "  sort_pairs: true\n"
        "whitelist:\n"
        "  items:\n"
        + "".join(f"    - {email}\n" for email in emails)
    )
    return path


class TestParser:
    """Tests for argument parsing."""

    def test_global_flags(self):
        args = create_parser().parse_args(["--hash", "sha256", "--no-sort-pairs", "root", "a"])

        assert args.hash == "sha256"
        assert args.sort_pairs is False
        assert args.items == ["a"]

    def test_sort_pairs_defaults_to_none(self):
        args = create_parser().parse_args(["root"])

        assert args.sort_pairs is None

    def test_unknown_hash_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--hash", "md5", "root"])

    def test_no_command_is_error(self, workdir):
        assert main([]) == EXIT_RUNTIME_ERROR


class TestRootCommand:
    """Tests for the root command."""

    def test_root_from_arguments(self, workdir, capsys):
        code = main(["--hash", "sha256", "--no-sort-pairs", "root", "a", "b", "c"])

        assert code == EXIT_SUCCESS
        expected = build_tree(["a", "b", "c"], hash_fn=sha256).root_hex()
        assert capsys.readouterr().out.strip() == expected

    def test_root_from_config(self, config_file, emails, capsys):
        code = main(["--config", str(config_file), "root", "--json"])

        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        expected = build_tree(emails, hash_fn=keccak256, sort_pairs=True)
        assert data["root"] == expected.root_hex()
        assert data["leaf_count"] == 3
        assert data["height"] == 2
        assert data["hash_algorithm"] == "keccak256"
        assert data["sort_pairs"] is True

    def test_root_from_items_file(self, workdir, emails, capsys):
        items_file = workdir / "emails.txt"
        items_file.write_text("\n".join(emails) + "\n")

        code = main(["root", "--items-file", str(items_file)])

        assert code == EXIT_SUCCESS
        expected = build_tree(emails, hash_fn=keccak256, sort_pairs=True).root_hex()
        assert capsys.readouterr().out.strip() == expected

    def test_root_without_items_fails(self, workdir, capsys):
        code = main(["root"])

        assert code == EXIT_RUNTIME_ERROR
        assert "empty" in capsys.readouterr().err

    def test_missing_config_file_fails(self, workdir, capsys):
        code = main(["--config", str(workdir / "missing.yaml"), "root"])

        assert code == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err


class TestProofCommand:
    """Tests for the proof command."""

    def test_proof_prints_siblings(self, config_file, emails, capsys):
        code = main(["--config", str(config_file), "proof", "email2@example.com"])

        assert code == EXIT_SUCCESS
        lines = capsys.readouterr().out.strip().splitlines()
        tree = build_tree(emails, hash_fn=keccak256, sort_pairs=True)
        assert lines[0] == "Merkle Proof for email2@example.com:"
        assert lines[1:] == tree.hex_proof("email2@example.com")

    def test_proof_json_document(self, config_file, capsys):
        code = main(["--config", str(config_file), "proof", "email1@example.com", "--json"])

        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["item"] == "email1@example.com"
        assert data["hash_algorithm"] == "keccak256"
        assert len(data["steps"]) == 2

    def test_not_whitelisted(self, config_file, capsys):
        code = main(["--config", str(config_file), "proof", "mallory@example.com"])

        assert code == EXIT_VERIFICATION_FAILED
        assert "Not whitelisted" in capsys.readouterr().err

    def test_not_whitelisted_json(self, config_file, capsys):
        code = main(["--config", str(config_file), "proof", "mallory@example.com", "--json"])

        assert code == EXIT_VERIFICATION_FAILED
        assert json.loads(capsys.readouterr().out)["code"] == "LEAF_NOT_FOUND"


class TestVerifyCommand:
    """Tests for the verify command."""

    @pytest.fixture
    def proof_file(self, config_file, workdir):
        path = workdir / "proof.json"
        code = main(["--config", str(config_file), "proof", "email2@example.com", "--out", str(path)])
        assert code == EXIT_SUCCESS
        return path

    @pytest.fixture
    def root_hex(self, emails):
        return build_tree(emails, hash_fn=keccak256, sort_pairs=True).root_hex()

    def test_valid_proof(self, proof_file, root_hex, capsys):
        capsys.readouterr()

        code = main(["verify", "email2@example.com", "--proof", str(proof_file), "--root", root_hex])

        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "VALID"

    def test_item_defaults_to_document(self, proof_file, root_hex, capsys):
        capsys.readouterr()

        code = main(["verify", "--proof", str(proof_file), "--root", root_hex, "--json"])

        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["valid"] is True
        assert data["code"] is None
        assert data["item"] == "email2@example.com"

    def test_invalid_json_reports_root_mismatch(self, proof_file, capsys):
        other_root = build_tree(["x", "y", "z"], hash_fn=keccak256, sort_pairs=True).root_hex()
        capsys.readouterr()

        code = main(["verify", "--proof", str(proof_file), "--root", other_root, "--json"])

        assert code == EXIT_VERIFICATION_FAILED
        data = json.loads(capsys.readouterr().out)
        assert data["valid"] is False
        assert data["code"] == "ROOT_MISMATCH"

    def test_leaf_not_matching_item_is_malformed(self, proof_file, root_hex, capsys):
        data = json.loads(proof_file.read_text())
        data["leaf"] = keccak256(b"mallory@example.com").hex()
        proof_file.write_text(json.dumps(data))
        capsys.readouterr()

        code = main(["verify", "--proof", str(proof_file), "--root", root_hex])

        assert code == EXIT_RUNTIME_ERROR
        assert "leaf does not match" in capsys.readouterr().err

    def test_wrong_item_invalid(self, proof_file, root_hex, capsys):
        capsys.readouterr()

        code = main(["verify", "email1@example.com", "--proof", str(proof_file), "--root", root_hex])

        assert code == EXIT_VERIFICATION_FAILED
        assert capsys.readouterr().out.strip() == "INVALID"

    def test_other_root_invalid(self, proof_file):
        other_root = build_tree(["x", "y", "z"], hash_fn=keccak256, sort_pairs=True).root_hex()

        code = main(["verify", "--proof", str(proof_file), "--root", other_root])

        assert code == EXIT_VERIFICATION_FAILED

    def test_malformed_sibling(self, proof_file, root_hex, capsys):
        data = json.loads(proof_file.read_text())
        data["steps"][0]["sibling"] = data["steps"][0]["sibling"][:-2]
        proof_file.write_text(json.dumps(data))
        capsys.readouterr()

        code = main(["verify", "--proof", str(proof_file), "--root", root_hex])

        assert code == EXIT_RUNTIME_ERROR
        assert "malformed proof" in capsys.readouterr().err

    def test_invalid_document(self, workdir, capsys):
        path = workdir / "broken.json"
        path.write_text('{"item": "a"}')

        code = main(["verify", "--proof", str(path)])

        assert code == EXIT_RUNTIME_ERROR
        assert "invalid proof document" in capsys.readouterr().err

    def test_missing_proof_file(self, workdir):
        assert main(["verify", "--proof", str(workdir / "nope.json")]) == EXIT_RUNTIME_ERROR


class TestConfigCommand:
    """Tests for the config command."""

    def test_init_creates_template(self, workdir):
        code = main(["config", "--init"])

        assert code == EXIT_SUCCESS
        assert (workdir / "whitelist.yaml").exists()

    def test_init_refuses_to_overwrite(self, workdir):
        (workdir / "whitelist.yaml").write_text("tree: {}\n")

        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR

    def test_init_then_root_uses_template(self, workdir, emails, capsys):
        main(["config", "--init"])
        capsys.readouterr()

        code = main(["root"])

        assert code == EXIT_SUCCESS
        expected = build_tree(emails, hash_fn=keccak256, sort_pairs=True).root_hex()
        assert capsys.readouterr().out.strip() == expected

    def test_show(self, config_file, capsys):
        code = main(["--config", str(config_file), "config", "--show"])

        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["tree"]["hash_algorithm"] == "keccak256"
        assert len(data["whitelist"]["items"]) == 3
