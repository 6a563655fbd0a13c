pytest_plugins = ["api_mocker.pytest_plugin"]
