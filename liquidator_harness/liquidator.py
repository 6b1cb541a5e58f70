"""Launching the external liquidator and collecting its output."""
import json
import os
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from ape.logging import logger

from liquidator_harness.constants import LIQUIDATOR_TIMEOUT
from liquidator_harness.exceptions import LiquidatorTimeout
from liquidator_harness.log_stream import LogStream

DEFAULT_COMMAND = 'cargo run --'

DEFAULT_ENV = {
    'RUST_BACKTRACE': '1',
    'RUST_LOG': 'liquidator,yield_liquidator=debug',
}


@dataclass
class LiquidatorConfig:
    witch: str
    flash: str
    multicall2: str
    base_to_debt_threshold: Optional[Dict[str, int]] = None
    swap_router_02: Optional[str] = None

    def as_json(self):
        config = {
            'Witch': self.witch,
            'Flash': self.flash,
            'Multicall2': self.multicall2,
        }
        if self.base_to_debt_threshold is not None:
            config['BaseToDebtThreshold'] = dict(self.base_to_debt_threshold)
        if self.swap_router_02 is not None:
            config['SwapRouter02'] = self.swap_router_02
        return config

    def write(self, path):
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.as_json(), f, indent=2)
        return path


@dataclass
class LiquidatorOptions:
    config: Path
    url: str
    chain_id: int
    private_key: Path
    gas_boost: int = 10
    one_shot: bool = True
    json_log: bool = True
    file: str = '/dev/null'
    interval: Optional[int] = None
    multicall_batch_size: Optional[int] = None
    min_ratio: Optional[int] = None
    bump_gas_delay: Optional[int] = None
    start_block: Optional[int] = None
    instance_name: Optional[str] = None

    def argv(self) -> List[str]:
        args = ['-c', str(self.config), '-u', self.url, '-C', str(self.chain_id),
                '-p', str(self.private_key), '--gas-boost', str(self.gas_boost)]
        for flag, value in [('--interval', self.interval),
                            ('--multicall-batch-size', self.multicall_batch_size),
                            ('--min-ratio', self.min_ratio),
                            ('--bump-gas-delay', self.bump_gas_delay),
                            ('--start-block', self.start_block),
                            ('--instance-name', self.instance_name)]:
            if value is not None:
                args += [flag, str(value)]
        if self.one_shot:
            args.append('--one-shot')
        if self.json_log:
            args.append('--json-log')
        args += ['--file', str(self.file)]
        return args


@dataclass
class LiquidatorRun:
    returncode: int
    stdout: str
    stderr: str
    log: LogStream = field(init=False, repr=False)

    def __post_init__(self):
        self.log = LogStream(self.stdout)

    @property
    def succeeded(self):
        return self.returncode == 0


def liquidator_command():
    return shlex.split(os.environ.get('LIQUIDATOR_COMMAND', DEFAULT_COMMAND))


def write_inputs(tmp_root, config, private_key, url, chain_id, **options):
    """Writes config.json and the private key file, returns the options to run with."""
    tmp_root = Path(tmp_root)
    config_path = config.write(tmp_root / 'config.json')

    private_key_path = tmp_root / 'private_key'
    if isinstance(private_key, bytes):
        private_key = private_key.hex()
    private_key_path.write_text(private_key[2:] if private_key.startswith('0x') else private_key)

    return LiquidatorOptions(config=config_path, url=url, chain_id=chain_id,
                             private_key=private_key_path, **options)


def _text(output):
    if output is None:
        return ''
    if isinstance(output, bytes):
        return output.decode('utf-8', errors='replace')
    return output


def run_liquidator(tmp_root, options, command=None, timeout=LIQUIDATOR_TIMEOUT, cwd=None):
    tmp_root = Path(tmp_root)
    argv = list(command or liquidator_command()) + options.argv()
    env = {**DEFAULT_ENV, **os.environ}

    logger.info(f"Running liquidator: {' '.join(argv)}")
    try:
        result = subprocess.run(argv, capture_output=True, encoding='utf-8',
                                env=env, timeout=timeout, cwd=cwd)
    except subprocess.TimeoutExpired as e:
        (tmp_root / 'stdout').write_text(_text(e.stdout))
        (tmp_root / 'stderr').write_text(_text(e.stderr))
        raise LiquidatorTimeout(argv, timeout) from e

    (tmp_root / 'stdout').write_text(result.stdout)
    (tmp_root / 'stderr').write_text(result.stderr)
    logger.info(f"tmp root: {tmp_root}")

    # a failed run still gets its stdout checked; missing messages fail the scenario
    if result.returncode != 0:
        logger.warning(f"Liquidator exited with code {result.returncode}")

    return LiquidatorRun(result.returncode, result.stdout, result.stderr)
