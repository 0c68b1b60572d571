"""Shared pytest fixtures for the Catalyst test suite.

Provides reusable fixtures for:
- A fake ``mix phx.new`` output tree (mix.exs, router, config, application, app.js)
- A ProjectContext over that tree
- A mocked ``run_command`` so no mix task ever runs
- A recording Rich console
"""

from __future__ import annotations

import io
import textwrap
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from rich.console import Console

from catalyst.config import Config
from catalyst.modules import ProjectContext


# ---------------------------------------------------------------------------
# Generated project contents
# ---------------------------------------------------------------------------

MIX_EXS = textwrap.dedent("""\
    defmodule MyApp.MixProject do
      use Mix.Project

      def project do
        [
          app: :my_app,
          version: "0.1.0",
          elixir: "~> 1.14",
          start_permanent: Mix.env() == :prod,
          aliases: aliases(),
          deps: deps()
        ]
      end

      # Specifies your project dependencies.
      #
      # Type `mix help deps` for examples and options.
      defp deps do
        [
          {:phoenix, "~> 1.7.14"},
          {:phoenix_ecto, "~> 4.5"},
          {:ecto_sql, "~> 3.10"},
          {:postgrex, ">= 0.0.0"},
          {:swoosh, "~> 1.5"},
          {:jason, "~> 1.2"}
        ]
      end

      defp aliases do
        [
          setup: ["deps.get", "ecto.setup"]
        ]
      end
    end
""")

ROUTER_EX = textwrap.dedent("""\
    defmodule MyAppWeb.Router do
      use MyAppWeb, :router

      pipeline :browser do
        plug :accepts, ["html"]
        plug :fetch_session
        plug :protect_from_forgery
      end

      pipeline :api do
        plug :accepts, ["json"]
      end

      scope "/", MyAppWeb do
        pipe_through :browser

        get "/", PageController, :home
      end
    end
""")

CONFIG_EXS = textwrap.dedent("""\
    # This file is responsible for configuring your application.
    import Config

    config :my_app,
      ecto_repos: [MyApp.Repo],
      generators: [timestamp_type: :utc_datetime]

    import_config "#{config_env()}.exs"
""")

TEST_EXS = textwrap.dedent("""\
    import Config

    # Configure your database
    config :my_app, MyApp.Repo,
      database: "my_app_test#{System.get_env("MIX_TEST_PARTITION")}",
      pool: Ecto.Adapters.SQL.Sandbox
""")

APPLICATION_EX = textwrap.dedent("""\
    defmodule MyApp.Application do
      @moduledoc false

      use Application

      @impl true
      def start(_type, _args) do
        children = [
          MyAppWeb.Telemetry,
          MyApp.Repo,
          MyAppWeb.Endpoint
        ]

        opts = [strategy: :one_for_one, name: MyApp.Supervisor]
        Supervisor.start_link(children, opts)
      end
    end
""")

APP_JS = textwrap.dedent("""\
    // If you want to use Phoenix channels, run `mix help phx.gen.channel`
    // import "./user_socket.js"

    import "phoenix_html"
    import {Socket} from "phoenix"
    import {LiveSocket} from "phoenix_live_view"

    let csrfToken = document.querySelector("meta[name='csrf-token']").getAttribute("content")
    let liveSocket = new LiveSocket("/live", Socket, {params: {_csrf_token: csrfToken}})

    liveSocket.connect()
""")


def write_phoenix_tree(root: Path, name: str = "my_app") -> Path:
    """Write the subset of a ``mix phx.new`` tree the modules touch."""
    web = f"{name}_web"
    files = {
        "mix.exs": MIX_EXS,
        f"lib/{web}/router.ex": ROUTER_EX,
        "config/config.exs": CONFIG_EXS,
        "config/test.exs": TEST_EXS,
        f"lib/{name}/application.ex": APPLICATION_EX,
        "assets/js/app.js": APP_JS,
        "priv/repo/migrations/.formatter.exs": "[\n  import_deps: [:ecto_sql],\n  inputs: [\"*.exs\"]\n]\n",
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def phoenix_root(tmp_path: Path) -> Path:
    """A freshly generated-looking Phoenix project named ``my_app``."""
    return write_phoenix_tree(tmp_path / "my_app")


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def project(phoenix_root: Path, config: Config) -> ProjectContext:
    """ProjectContext over :func:`phoenix_root`."""
    return ProjectContext.from_path(phoenix_root, config)


@pytest.fixture
def mock_mix():
    """Patch the subprocess runner used by modules; every mix task succeeds."""
    with patch(
        "catalyst.modules.base.run_command",
        new_callable=AsyncMock,
        return_value=(0, "", ""),
    ) as mocked:
        yield mocked


@pytest.fixture
def record_console() -> Console:
    """A Rich console writing into memory, read back with ``export_text()``."""
    return Console(file=io.StringIO(), record=True, width=200)


def snapshot_tree(root: Path) -> dict[str, bytes]:
    """Map every file below *root* to its bytes."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def snapshot():
    return snapshot_tree


@pytest.fixture
def make_phoenix_tree():
    return write_phoenix_tree
