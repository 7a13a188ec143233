import argparse
import sys
from src.util.logger import log
from src.util.runner import Runner

COMMANDS = {
    "controller": "run_controller",
    "reconcile": "run_reconcile_once",
    "cleanup": "run_cleanup",
}

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Genet pod lifecycle management")
    parser.add_argument("command", choices=sorted(COMMANDS), help="controller: run every interval; "
                        "reconcile: run a single pass; cleanup: delete all unprotected pods")
    parser.add_argument("--config", default=None, help="Path to config.yaml (default: $GENET_CONFIG)")
    return parser.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        runner = Runner(args.config)
        getattr(runner, COMMANDS[args.command])()
    except KeyboardInterrupt:
        pass
    except Exception as e:
        log(f'Error: {e}', "ERROR")
        return 1
    finally:
        log('Shutting down...')
    return 0

if __name__ == '__main__':
    sys.exit(main())
