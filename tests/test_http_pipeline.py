from app.web.controllers import Controller, action


class BoomController(Controller):
	@action
	async def explode(self):
		raise RuntimeError("kaboom")


class LockedController(Controller):
	async def authorize(self, action_name: str) -> bool:
		return action_name != "secret"

	@action
	async def secret(self):
		raise AssertionError("should not run")


def test_default_route_resolves_home_index(app_client):
	r = app_client.get("/")
	assert r.status_code == 200
	assert "Welcome to ABC Retail" in r.text
	assert "Queue &#39;order-processing&#39;" in r.text or "Queue 'order-processing'" in r.text


def test_controller_and_action_defaults(app_client):
	assert app_client.get("/Home").status_code == 200
	assert app_client.get("/home/index").status_code == 200
	assert app_client.get("/Home/Index/42").status_code == 200


def test_privacy_page(app_client):
	r = app_client.get("/Home/Privacy")
	assert r.status_code == 200
	assert "Privacy Policy" in r.text


def test_unknown_controller_or_action_is_404(app_client):
	assert app_client.get("/Nope").status_code == 404
	assert app_client.get("/Home/Nope").status_code == 404
	assert app_client.get("/Home/Index/1/extra").status_code == 404


def test_plain_http_redirects_to_https(make_client):
	with make_client(base_url="http://testserver") as client:
		r = client.get("/Home/Privacy?x=1")

	assert r.status_code == 307
	assert r.headers["location"] == "https://testserver/Home/Privacy?x=1"


def test_hsts_header_outside_development(app_client):
	r = app_client.get("/")
	assert r.headers["strict-transport-security"] == "max-age=2592000"


def test_no_hsts_in_development(make_client):
	with make_client(environment="Development") as client:
		r = client.get("/")
	assert r.status_code == 200
	assert "strict-transport-security" not in r.headers


def test_no_hsts_for_localhost(make_client):
	with make_client(base_url="https://localhost") as client:
		r = client.get("/")
	assert r.status_code == 200
	assert "strict-transport-security" not in r.headers


def test_unhandled_error_redirects_to_error_page(make_client):
	with make_client(controllers=[BoomController], raise_server_exceptions=False) as client:
		r = client.get("/Boom/Explode")
	assert r.status_code == 302
	assert r.headers["location"] == "/Home/Error"


def test_error_redirect_leaves_traceback_logging_to_the_server(make_client, caplog):
	with make_client(controllers=[BoomController], raise_server_exceptions=False) as client:
		with caplog.at_level("INFO", logger="app.web.middleware"):
			client.get("/Boom/Explode")

	records = [rec for rec in caplog.records if rec.name == "app.web.middleware"]
	assert len(records) == 1
	assert records[0].exc_info is None
	assert "RuntimeError" in records[0].getMessage()


def test_error_page_renders_request_id(app_client):
	r = app_client.get("/Home/Error", headers={"X-Request-ID": "req-123"})
	assert r.status_code == 200
	assert "req-123" in r.text
	assert r.headers["cache-control"] == "no-store"


def test_development_shows_traceback_instead_of_redirect(make_client):
	with make_client(environment="Development", controllers=[BoomController], raise_server_exceptions=False) as client:
		r = client.get("/Boom/Explode")
	assert r.status_code == 500
	assert "kaboom" in r.text


def test_authorization_hook_can_deny_action(make_client):
	with make_client(controllers=[LockedController]) as client:
		r = client.get("/Locked/Secret")
	assert r.status_code == 403


def test_static_files_are_served(app_client):
	r = app_client.get("/static/css/site.css")
	assert r.status_code == 200
	assert "text/css" in r.headers["content-type"]
