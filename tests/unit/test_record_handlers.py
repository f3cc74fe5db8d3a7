"""
Tests for info, update, remove and use.
"""


class TestInfo:
    def test_shows_fields_in_schema_order(self, interpreter, populated_store, output):
        ids = populated_store.ids
        interpreter.handle_command(f"info task {ids['task_active']}")

        assert output[:5] == [
            f"Task {ids['task_active']}",
            "  Title: Fix bug",
            f"  Parent: {ids['project']}",
            "  Priority: high",
            "  Status: active",
        ]
        assert output[5].startswith("  Created: ")

    def test_alias_and_lowercase_id(self, interpreter, populated_store, output):
        program_id = populated_store.ids["program"]
        interpreter.handle_command(f"show prg {program_id.lower()}")

        assert output[0] == f"Program {program_id}"
        assert "  Description: Day job" in output

    def test_not_found(self, interpreter, output):
        interpreter.handle_command("info task NOPE00")
        assert output == ["Error: task NOPE00 not found"]

    def test_target_required(self, interpreter, output):
        interpreter.handle_command("info task")
        assert output == ['Error: "info" requires a target ID. Usage: info task <id>']


class TestUpdate:
    def test_updates_fields(self, interpreter, populated_store, output, refreshes):
        task_id = populated_store.ids["task_active"]
        interpreter.handle_command(f"update task {task_id} status:paused tags:ui,login")

        assert output == [
            f"✓ Updated task: {task_id}",
            "  Status: paused",
            "  Tags: ui, login",
        ]
        record = populated_store.repository("task").get(task_id)
        assert record["status"] == "paused"
        assert record["tags"] == ["ui", "login"]
        assert record["priority"] == "high"
        assert len(refreshes) == 1

    def test_done_shortcut(self, interpreter, populated_store):
        task_id = populated_store.ids["task_active"]
        interpreter.handle_command(f"done task {task_id}")

        assert populated_store.repository("task").get(task_id)["status"] == "completed"

    def test_nothing_to_update(self, interpreter, populated_store, output, refreshes):
        interpreter.handle_command(f"edit task {populated_store.ids['task_active']}")

        assert output[0] == "Error: Nothing to update"
        assert refreshes == []

    def test_not_found(self, interpreter, output):
        interpreter.handle_command("update task NOPE00 status:active")
        assert output == ["Error: task NOPE00 not found"]

    def test_bad_progress(self, interpreter, populated_store, output):
        program_id = populated_store.ids["program"]
        interpreter.handle_command(f"update program {program_id} progress:lots")

        assert output == ['Error: Invalid progress: "lots". Expected a number']


class TestRemove:
    def test_force(self, interpreter, populated_store, output, refreshes):
        task_id = populated_store.ids["task_done"]
        interpreter.handle_command(f"rm task {task_id} --force")

        assert output == [f"✓ Removed task: {task_id}"]
        assert populated_store.repository("task").get(task_id) is None
        assert len(refreshes) == 1

    def test_confirmed(self, interpreter, populated_store, output):
        task_id = populated_store.ids["task_done"]
        interpreter.handle_command(f"remove task {task_id}")

        assert output == [f'Remove task {task_id} "Write docs"? (y/N):']
        assert interpreter.is_prompt_mode

        interpreter.handle_prompt_input("y")
        assert output[-1] == f"✓ Removed task: {task_id}"
        assert populated_store.repository("task").get(task_id) is None

    def test_declined(self, interpreter, populated_store, output, refreshes):
        task_id = populated_store.ids["task_done"]
        interpreter.handle_command(f"remove task {task_id}")
        interpreter.handle_prompt_input("")

        assert output[-1] == "Cancelled."
        assert populated_store.repository("task").get(task_id) is not None
        assert refreshes == []

    def test_clears_matching_context(self, interpreter, populated_store, session):
        project_id = populated_store.ids["project"]
        session.set_current("project", project_id)
        interpreter.handle_command(f"remove project {project_id.lower()} --yes")

        assert session.get_current("project") is None

    def test_removing_current_program_clears_deeper_context(self, interpreter, populated_store, session):
        ids = populated_store.ids
        session.set_current("program", ids["program"])
        session.set_current("project", ids["project"])
        session.set_current("task", ids["task_active"])
        interpreter.handle_command(f"remove program {ids['program']} --force")

        assert session.get_current("program") is None
        assert session.default_parent("task") is None
        assert session.default_parent("subtask") is None

    def test_removing_other_record_keeps_context(self, interpreter, populated_store, session):
        ids = populated_store.ids
        session.set_current("project", ids["project"])
        interpreter.handle_command(f"remove task {ids['task_done']} --force")

        assert session.get_current("project") == ids["project"]

    def test_not_found(self, interpreter, output):
        interpreter.handle_command("remove task NOPE00 --force")
        assert output == ["Error: task NOPE00 not found"]


class TestUse:
    def test_use_sets_context_and_default_parent(self, interpreter, populated_store, output, session):
        project_id = populated_store.ids["project"]
        interpreter.handle_command(f"use project {project_id}")

        assert output == [f'Using project {project_id} "Website"']
        assert session.default_parent("task") == project_id

        interpreter.handle_command('create task "From context"')
        tasks = populated_store.repository("task").list(parent_id=project_id)
        assert "From context" in [t["title"] for t in tasks]

    def test_deeper_levels_cleared(self, interpreter, populated_store, session):
        session.current_work_item_id = "OLD001"
        interpreter.handle_command(f"cd prg {populated_store.ids['program']}")

        assert session.current_work_item_id is None

    def test_show_context(self, interpreter, output, session):
        session.current_container_id = "PRG001"
        interpreter.handle_command("use")

        assert output == [
            "Context:",
            "  program: PRG001",
            "  project: (none)",
            "  task: (none)",
        ]

    def test_clear_level(self, interpreter, output, session):
        session.current_sub_container_id = "PRJ001"
        interpreter.handle_command("use project")

        assert output == ["Cleared project context"]
        assert session.current_sub_container_id is None

    def test_subtask_rejected(self, interpreter, output):
        interpreter.handle_command("use subtask S1")
        assert output[0] == "Error: Cannot use a subtask as context"

    def test_unknown_record(self, interpreter, output, session):
        interpreter.handle_command("use program NOPE00")

        assert output == ["Error: program NOPE00 not found"]
        assert session.current_container_id is None
