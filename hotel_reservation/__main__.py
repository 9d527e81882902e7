from .bootstrap import bootstrap_app
from .interaction.console import ConsoleApp


def main() -> None:
    app = bootstrap_app(notify=print)
    ConsoleApp(app["service"], logger=app["logger"]).run()


if __name__ == "__main__":
    main()
