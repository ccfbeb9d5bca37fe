from app.models import AccessToken, Project, Task, User


class TestAuthentication:
    def test_register_login_logout(self, client):
        registered = client.post(
            "/register",
            json={"name": "Ada", "email": "ada@example.com", "password": "secret123", "role": "admin"},
        )
        assert registered.status_code == 201
        assert registered.json()["token_type"] == "Bearer"

        login = client.post("/login", json={"email": "ada@example.com", "password": "secret123"})
        assert login.status_code == 200
        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

        # Self-registration never grants admin
        assert client.get("/users/", headers=headers).status_code == 403

        assert client.post("/logout", headers=headers).status_code == 200
        assert client.get("/tasks/", headers=headers).status_code == 401

    def test_duplicate_email_conflicts(self, client, make_user):
        user = make_user()
        response = client.post("/register", json={"name": "Dup", "email": user.email, "password": "secret123"})
        assert response.status_code == 409

    def test_bad_credentials(self, client, make_user):
        user = make_user()
        response = client.post("/login", json={"email": user.email, "password": "wrong-password"})
        assert response.status_code == 401

    def test_register_validation(self, client):
        response = client.post("/register", json={"name": "x", "email": "not-an-email", "password": "123"})
        assert response.status_code == 422

    def test_token_of_deleted_user_is_rejected(self, client, db, make_user, login):
        user = make_user()
        headers = login(user)
        admin_headers = login(make_user(role="admin"))

        assert client.delete(f"/users/{user.id}", headers=admin_headers).status_code == 204
        assert client.get("/tasks/", headers=headers).status_code == 401
        assert db.query(AccessToken).filter(AccessToken.user_id == user.id).count() == 0


class TestUserAccess:
    def test_only_admin_lists_users(self, client, make_user, login):
        member, admin = make_user(), make_user(role="admin")
        assert client.get("/users/", headers=login(member)).status_code == 403

        response = client.get("/users/", headers=login(admin))
        assert response.status_code == 200
        assert {u["id"] for u in response.json()} == {member.id, admin.id}

    def test_view_self_but_not_others(self, client, make_user, login):
        me, other = make_user(), make_user()
        headers = login(me)
        assert client.get(f"/users/{me.id}", headers=headers).status_code == 200
        assert client.get(f"/users/{other.id}", headers=headers).status_code == 403
        assert client.get("/users/4040", headers=headers).status_code == 404

    def test_member_cannot_change_own_role(self, client, make_user, login):
        me = make_user()
        response = client.put(f"/users/{me.id}", json={"role": "admin"}, headers=login(me))
        assert response.status_code == 403

    def test_member_can_update_own_profile(self, client, make_user, login):
        me = make_user()
        response = client.put(f"/users/{me.id}", json={"name": "Renamed", "password": "newsecret"}, headers=login(me))
        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"

        assert client.post("/login", json={"email": me.email, "password": "newsecret"}).status_code == 200

    def test_admin_assigns_roles(self, client, make_user, login):
        member = make_user()
        response = client.put(f"/users/{member.id}", json={"role": "admin"}, headers=login(make_user(role="admin")))
        assert response.status_code == 200
        assert response.json()["role"] == "admin"

    def test_only_admin_creates_users(self, client, make_user, login):
        payload = {"name": "New", "email": "new@example.com", "password": "secret123", "role": "member"}
        assert client.post("/users/", json=payload, headers=login(make_user())).status_code == 403

        response = client.post("/users/", json=payload, headers=login(make_user(role="admin")))
        assert response.status_code == 201
        assert response.json()["email"] == "new@example.com"

    def test_members_cannot_delete_accounts(self, client, make_user, login):
        me = make_user()
        assert client.delete(f"/users/{me.id}", headers=login(me)).status_code == 403


class TestUserTasks:
    def test_own_tasks_visible(self, client, make_user, login, make_task):
        me = make_user()
        task = make_task(me)
        response = client.get(f"/users/{me.id}/tasks", headers=login(me))
        assert [t["id"] for t in response.json()] == [task.id]

    def test_other_users_tasks_forbidden(self, client, make_user, login, make_task):
        me, other = make_user(), make_user()
        make_task(other)
        assert client.get(f"/users/{other.id}/tasks", headers=login(me)).status_code == 403

    def test_admin_sees_any_users_tasks(self, client, make_user, login, make_task):
        other = make_user()
        task = make_task(other)
        make_task(make_user())
        response = client.get(f"/users/{other.id}/tasks", headers=login(make_user(role="admin")))
        assert [t["id"] for t in response.json()] == [task.id]


class TestUserDeletion:
    def test_delete_cascades_to_owned_resources(self, client, db, make_user, login, make_project, make_task):
        doomed = make_user()
        project = make_project(doomed)
        make_task(doomed, project=project)
        make_task(doomed)
        # The row is removed by another session, so the instance cannot be reloaded afterwards
        doomed_id = doomed.id

        response = client.delete(f"/users/{doomed_id}", headers=login(make_user(role="admin")))
        assert response.status_code == 204

        assert db.query(User).filter(User.id == doomed_id).first() is None
        assert db.query(Project).filter(Project.owner_id == doomed_id).count() == 0
        assert db.query(Task).filter(Task.owner_id == doomed_id).count() == 0
