from asyncio import set_event_loop_policy
from uvloop import EventLoopPolicy

set_event_loop_policy(EventLoopPolicy())


def main() -> None:
    from cordhook.discord import CommandRegistry
    from cordhook.client import InteractionRouter
    from cordhook.commands import setup, LOCALES
    from cordhook.core import create_app
    from cordhook.models import Env
    from uvicorn import run

    env = Env.new()
    client = InteractionRouter(CommandRegistry(), LOCALES)
    setup(client)

    app = create_app(client, env.public_key, env)
    run(app, host='0.0.0.0', port=8080, forwarded_allow_ips='*')


if __name__ == '__main__':
    main()
