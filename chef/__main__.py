import asyncio

from chef.cli import main


asyncio.run(main())
