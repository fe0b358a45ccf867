"""
Tests for priority sorting and greedy task assignment.
"""

from datetime import date, datetime

from study_scheduler.schemas import TaskSchema, TimeBlockSchema, UserPreferencesSchema
from study_scheduler.scheduling import ConstraintResolver, create_optimal_schedule
from study_scheduler.scheduling.scoring.priority_scoring import sort_tasks_by_priority

MONDAY = date(2025, 1, 6)


def preferences(start="09:00", end="11:00", study_blocks=(60,), break_duration=0, days=("monday",)):
    return UserPreferencesSchema(
        work_hours={"start": start, "end": end},
        study_blocks=list(study_blocks),
        break_duration=break_duration,
        preferred_days=list(days),
    )


def task(task_id, priority="medium", deadline=None, **extra):
    return TaskSchema(id=task_id, title=f"task {task_id}", priority=priority, deadline=deadline, **extra)


class TestPrioritySort:

    def test_priority_beats_deadline(self):
        tasks = [
            task(1, "high", datetime(2025, 1, 5)),
            task(2, "urgent", datetime(2025, 1, 10)),
        ]
        assert [t.id for t in sort_tasks_by_priority(tasks)] == [2, 1]

    def test_deadline_breaks_ties_and_undated_go_last(self):
        tasks = [
            task(1, "medium"),
            task(2, "medium", datetime(2025, 1, 9)),
            task(3, "medium", datetime(2025, 1, 7)),
            task(4, "low", datetime(2025, 1, 1)),
        ]
        assert [t.id for t in sort_tasks_by_priority(tasks)] == [3, 2, 1, 4]

    def test_plain_dict_tasks_keep_their_priority(self):
        tasks = [
            {"id": 1, "title": "low one", "priority": "low"},
            {"id": 2, "title": "urgent one", "priority": "urgent"},
            {"id": 3, "title": "medium dated", "priority": "medium", "deadline": "2025-01-08T09:00:00+02:00"},
        ]
        assert [t["id"] for t in sort_tasks_by_priority(tasks)] == [2, 3, 1]

    def test_sort_does_not_mutate_input(self):
        tasks = [task(1, "low"), task(2, "urgent")]
        sort_tasks_by_priority(tasks)
        assert [t.id for t in tasks] == [1, 2]


class TestAssignment:

    def test_tasks_fill_study_slots_in_order(self):
        tasks = [
            task(1, "low", estimated_duration=90, task_type="exam"),
            task(2, "urgent", estimated_duration=None, task_type="assignment"),
            task(3, "medium"),
        ]
        result = create_optimal_schedule(tasks, preferences(), start_date=MONDAY)

        assert result["success"] is True
        monday = result["schedule"]["daily"]["2025-01-06"]
        assert monday["day"] == "monday"
        assert [entry["task"].id for entry in monday["tasks"]] == [2, 3]
        assert [entry["estimatedDuration"] for entry in monday["tasks"]] == [60, 60]
        assert monday["studySessions"][0] == {
            "startTime": "09:00", "endTime": "10:00", "duration": 60, "taskId": 2, "taskTitle": "task 2",
        }
        assert monday["studySessions"][1]["startTime"] == "10:00"

    def test_weekly_summary(self):
        tasks = [
            task(1, "urgent", estimated_duration=90, task_type="exam"),
            task(2, "high", estimated_duration=None),
            task(3, "low"),
        ]
        weekly = create_optimal_schedule(tasks, preferences(), start_date=MONDAY)["schedule"]["weekly"]

        # task 3 does not fit into the two available slots
        assert weekly["totalTasks"] == 2
        assert weekly["totalStudyTime"] == 150
        assert weekly["tasksByPriority"] == {"urgent": 1, "high": 1, "medium": 0, "low": 0}
        assert weekly["tasksByType"] == {"exam": 1, "other": 1}
        assert weekly["efficiency"] == 80

    def test_slot_duration_is_not_compared_to_task_duration(self):
        tasks = [task(1, "high", estimated_duration=240)]
        monday = create_optimal_schedule(tasks, preferences(), start_date=MONDAY)["schedule"]["daily"]["2025-01-06"]

        assert monday["tasks"][0]["timeSlot"]["duration"] == 60
        assert monday["tasks"][0]["estimatedDuration"] == 240

    def test_breaks_are_never_assigned(self):
        tasks = [task(i) for i in range(1, 5)]
        result = create_optimal_schedule(tasks, preferences(study_blocks=(25,), break_duration=5), start_date=MONDAY)

        for entry in result["schedule"]["daily"]["2025-01-06"]["tasks"]:
            assert entry["timeSlot"]["type"] == "study"

    def test_assignment_continues_across_days(self):
        tasks = [task(i) for i in range(1, 5)]
        result = create_optimal_schedule(
            tasks, preferences(days=("monday", "tuesday")), start_date=MONDAY,
        )
        daily = result["schedule"]["daily"]

        assert [e["task"].id for e in daily["2025-01-06"]["tasks"]] == [1, 2]
        assert [e["task"].id for e in daily["2025-01-07"]["tasks"]] == [3, 4]

    def test_unavailable_time_reduces_capacity(self):
        resolver = ConstraintResolver(time_blocks=[
            TimeBlockSchema(id=1, day_of_week=1, start_time="09:00", end_time="10:00", block_type="unavailable"),
        ])
        tasks = [task(1), task(2)]
        result = create_optimal_schedule(tasks, preferences(), resolver=resolver, start_date=MONDAY)

        assert result["schedule"]["weekly"]["totalTasks"] == 1

    def test_constraint_overrides_are_applied(self):
        tasks = [task(1), task(2)]
        constraints = {"unavailableTime": {"monday": [{"start": "10:00", "end": "11:00"}]}}
        result = create_optimal_schedule(tasks, preferences(), constraints, start_date=MONDAY)

        assert [s["startTime"] for s in result["schedule"]["daily"]["2025-01-06"]["studySessions"]] == ["09:00"]

    def test_empty_task_list_is_a_valid_schedule(self):
        result = create_optimal_schedule([], preferences(), start_date=MONDAY)

        assert result["success"] is True
        assert result["schedule"]["daily"] == {"2025-01-06": {"day": "monday", "tasks": [], "studySessions": []}}
        assert result["schedule"]["weekly"]["totalTasks"] == 0
        assert result["schedule"]["weekly"]["efficiency"] == 0
        assert "studyTips" in result["schedule"]["recommendations"]


    def test_plain_dict_tasks_are_assigned(self):
        tasks = [
            {"id": 1, "title": "low one", "priority": "low", "task_type": "exam"},
            {"id": 2, "title": "urgent one", "priority": "urgent", "estimated_duration": 90},
        ]
        result = create_optimal_schedule(tasks, preferences(), start_date=MONDAY)

        assert result["success"] is True
        sessions = result["schedule"]["daily"]["2025-01-06"]["studySessions"]
        assert [(s["taskId"], s["taskTitle"]) for s in sessions] == [(2, "urgent one"), (1, "low one")]
        weekly = result["schedule"]["weekly"]
        assert weekly["totalStudyTime"] == 150
        assert weekly["tasksByPriority"]["urgent"] == 1
        assert weekly["tasksByType"] == {"other": 1, "exam": 1}


class TestFallback:

    def test_generation_failure_returns_fallback_schedule(self):
        tasks = [task(i, priority) for i, priority in enumerate(["low", "urgent", "high", "medium", "low", "urgent"])]
        result = create_optimal_schedule(tasks, {"study_blocks": [25]}, start_date=MONDAY)

        assert result["success"] is False
        schedule = result["schedule"]
        today = schedule["daily"]["2025-01-06"]
        assert today["day"] == "today"
        assert [entry["task"].id for entry in today["tasks"]] == [1, 5, 2, 3]
        assert all(entry["timeSlot"]["start_time"] == "09:00" for entry in today["tasks"])
        assert schedule["weekly"] == {"totalTasks": 4, "totalStudyTime": 240, "efficiency": 75}

    def test_fallback_with_few_tasks(self):
        result = create_optimal_schedule([task(1)], None, start_date=MONDAY)

        assert result["success"] is False
        assert result["schedule"]["weekly"]["totalTasks"] == 1
