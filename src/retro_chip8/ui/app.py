# src/retro_chip8/ui/app.py
"""
PySide6アプリケーションのエントリポイント。
設定とROMを読み込み、メインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.models import EmulatorConfig
from .main_window import MainWindow

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 interpreter")
    parser.add_argument("rom", nargs="?", help="path to a CHIP-8 ROM file")
    parser.add_argument("--config", help="path to a YAML configuration file")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="logging level (default: WARNING)")
    return parser


# @intent:responsibility コマンドライン引数と設定ファイルから最終的な設定を決定します。
def load_config(args: argparse.Namespace) -> EmulatorConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else EmulatorConfig()
    if args.rom:
        config.rom = args.rom
    return config


# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None):
    """
    アプリケーションのメイン関数。
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="[%(levelname)s] %(name)s: %(message)s")

    try:
        config = load_config(args)
        cpu = SystemBuilder().build_system(config)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        sys.exit(1)

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(cpu, config)
    main_win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
