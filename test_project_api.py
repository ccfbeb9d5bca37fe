from app.models import Project, Task


class TestProjectAccess:
    def test_listing_is_scoped(self, client, make_user, login, make_project):
        u1, u2 = make_user(), make_user()
        p1 = make_project(u1, name="Mine")
        p2 = make_project(u2, name="Theirs")

        mine = client.get("/projects/", headers=login(u1)).json()
        assert [p["id"] for p in mine] == [p1.id]
        assert mine[0]["owner"] == {"id": u1.id, "name": u1.name}

        everything = client.get("/projects/", headers=login(make_user(role="admin"))).json()
        assert [p["id"] for p in everything] == [p1.id, p2.id]

    def test_create_assigns_caller_as_owner(self, client, db, make_user, login):
        u1, u2 = make_user(), make_user()
        response = client.post(
            "/projects/",
            json={"name": "Launch", "description": "Ship it", "owner_id": u2.id},
            headers=login(u1),
        )
        assert response.status_code == 201
        stored = db.query(Project).filter(Project.id == response.json()["id"]).first()
        assert stored.owner_id == u1.id

    def test_show_includes_tasks(self, client, make_user, login, make_project, make_task):
        user = make_user()
        project = make_project(user)
        task = make_task(user, project=project)

        response = client.get(f"/projects/{project.id}", headers=login(user))
        assert response.status_code == 200
        assert [t["id"] for t in response.json()["tasks"]] == [task.id]

    def test_show_hides_tasks_owned_by_others(self, client, make_user, login, make_project, make_task):
        owner, other = make_user(), make_user()
        project = make_project(owner)
        mine = make_task(owner, project=project, title="Mine")
        # An admin can file someone else's task under this project
        foreign = make_task(other, project=project, title="Secret")
        owner_id, other_id = owner.id, other.id

        owner_view = client.get(f"/projects/{project.id}", headers=login(owner)).json()
        assert [(t["id"], t["owner"]) for t in owner_view["tasks"]] == [(mine.id, "You")]

        admin_view = client.get(f"/projects/{project.id}", headers=login(make_user(role="admin"))).json()
        assert [t["id"] for t in admin_view["tasks"]] == [mine.id, foreign.id]
        assert [t["owner"]["id"] for t in admin_view["tasks"]] == [owner_id, other_id]

    def test_project_page_size_is_capped_at_fifty(self, client, make_user, login, make_project):
        user = make_user()
        for i in range(55):
            make_project(user, name=f"Project {i}")
        headers = login(user)

        response = client.get("/projects/", params={"limit": 500}, headers=headers)
        assert response.status_code == 200
        assert len(response.json()) == 50

        second_page = client.get("/projects/", params={"skip": 50, "limit": 500}, headers=headers)
        assert len(second_page.json()) == 5

    def test_missing_project_is_404_not_403(self, client, make_user, login, make_project):
        make_project(make_user())
        headers = login(make_user())
        assert client.get("/projects/777", headers=headers).status_code == 404
        assert client.put("/projects/777", json={"name": "x"}, headers=headers).status_code == 404
        assert client.delete("/projects/777", headers=headers).status_code == 404

    def test_non_owner_forbidden(self, client, make_user, login, make_project):
        project = make_project(make_user())
        headers = login(make_user())
        assert client.get(f"/projects/{project.id}", headers=headers).status_code == 403
        assert client.put(f"/projects/{project.id}", json={"name": "x"}, headers=headers).status_code == 403
        assert client.delete(f"/projects/{project.id}", headers=headers).status_code == 403

    def test_partial_update(self, client, make_user, login, make_project):
        user = make_user()
        project = make_project(user, name="Before")
        response = client.put(f"/projects/{project.id}", json={"description": "New text"}, headers=login(user))
        assert response.status_code == 200
        assert response.json()["name"] == "Before"
        assert response.json()["description"] == "New text"


class TestProjectTasks:
    def test_non_owner_gets_403_not_empty_list(self, client, make_user, login, make_project, make_task):
        u1, u2 = make_user(), make_user()
        project = make_project(u1)
        for _ in range(3):
            make_task(u1, project=project)

        response = client.get(f"/projects/{project.id}/tasks", headers=login(u2))
        assert response.status_code == 403

    def test_owner_and_admin_see_project_tasks(self, client, make_user, login, make_project, make_task):
        u1 = make_user()
        project = make_project(u1)
        ids = [make_task(u1, project=project).id for _ in range(3)]
        make_task(u1)

        owner_view = client.get(f"/projects/{project.id}/tasks", headers=login(u1)).json()
        assert [t["id"] for t in owner_view] == ids

        admin_view = client.get(f"/projects/{project.id}/tasks", headers=login(make_user(role="admin"))).json()
        assert [t["id"] for t in admin_view] == ids

    def test_missing_project_is_404(self, client, make_user, login):
        assert client.get("/projects/404/tasks", headers=login(make_user())).status_code == 404


class TestProjectDeletion:
    def test_delete_cascades_to_tasks(self, client, db, make_user, login, make_project, make_task):
        user = make_user()
        project = make_project(user)
        task_ids = [make_task(user, project=project).id for _ in range(2)]
        headers = login(user)

        assert client.delete(f"/projects/{project.id}", headers=headers).status_code == 204

        for task_id in task_ids:
            assert client.get(f"/tasks/{task_id}", headers=headers).status_code == 404
        assert db.query(Task).filter(Task.id.in_(task_ids)).count() == 0

    def test_delete_removes_overdue_tasks_too(self, client, db, make_user, login, make_project, make_task, past):
        user = make_user()
        project = make_project(user)
        task_id = make_task(user, project=project, deadline=past).id
        headers = login(user)

        assert client.delete(f"/tasks/{task_id}", headers=headers).status_code == 403
        assert client.delete(f"/projects/{project.id}", headers=headers).status_code == 204
        assert client.get(f"/tasks/{task_id}", headers=headers).status_code == 404
