"""Tests for the run_exercise command-line entry point."""
import json

import pytest

from scripts import run_exercise


class TestLoadContacts:
    def test_accepts_bare_list(self, tmp_path):
        path = tmp_path / "contacts.json"
        path.write_text(json.dumps([{"first_name": "John", "last_name": "Doe"}]))
        contacts = run_exercise.load_contacts(path)
        assert [c.last_name for c in contacts] == ["Doe"]

    def test_accepts_wrapped_list(self, tmp_path):
        path = tmp_path / "contacts.json"
        path.write_text(json.dumps({"contacts": [{"last_name": "Jane"}]}))
        assert run_exercise.load_contacts(path)[0].last_name == "Jane"

    def test_invalid_contacts_exit_nonzero(self, tmp_path, capsys):
        path = tmp_path / "contacts.json"
        path.write_text(json.dumps([{"first_name": "NoLastName"}]))
        assert run_exercise.main(["link-contacts", str(path)]) == 1
        assert capsys.readouterr().out == ""


class TestParser:
    def test_create_opportunities_needs_names(self):
        with pytest.raises(SystemExit):
            run_exercise.build_parser().parse_args(["create-opportunities", "Acme"])

    def test_insert_delete_collects_names(self):
        args = run_exercise.build_parser().parse_args(["insert-delete", "A", "B"])
        assert args.names == ["A", "B"]


@pytest.mark.usefixtures("db_schema")
class TestRun:
    @pytest.mark.asyncio
    async def test_find_or_create(self):
        args = run_exercise.build_parser().parse_args(["find-or-create", "Acme"])
        first = await run_exercise.run(args)
        second = await run_exercise.run(args)
        assert first["description"] == "created"
        assert second["description"] == "updated"
        assert first["id"] == second["id"]

    @pytest.mark.asyncio
    async def test_link_contacts(self, tmp_path):
        path = tmp_path / "contacts.json"
        path.write_text(json.dumps([{"last_name": "Doe"}, {"last_name": "Jane"}]))
        args = run_exercise.build_parser().parse_args(["link-contacts", str(path)])
        result = await run_exercise.run(args, run_exercise.load_contacts(path))
        assert len(result) == 2
        assert result[0]["account_id"] != result[1]["account_id"]
        assert all(c["account_id"] for c in result)

    @pytest.mark.asyncio
    async def test_create_opportunities(self):
        parser = run_exercise.build_parser()
        await run_exercise.run(parser.parse_args(["create-opportunities", "Acme", "A"]))
        result = await run_exercise.run(parser.parse_args(["create-opportunities", "Acme", "A", "B"]))
        assert [o["name"] for o in result] == ["A", "B"]
        assert {o["stage_name"] for o in result} == {"Prospecting"}

    @pytest.mark.asyncio
    async def test_insert_delete(self):
        args = run_exercise.build_parser().parse_args(["insert-delete", "X", "Y"])
        assert await run_exercise.run(args) == {"removed": 2}
