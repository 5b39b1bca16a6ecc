# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Provide access to the sysctl registry of a remote host over SSH. Every operation runs the 'sysctl'
tool on the remote host in a new SSH session.

SECURITY NOTICE: this module should only be used for debugging and development purposes. The remote
host key is not verified.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import os
import shlex
import logging
from pathlib import Path
import paramiko
from sysctlcpulibs import _SysctlBase
from sysctlcpulibs.helperlibs import Logging, ClassHelpers
from sysctlcpulibs.helperlibs.Exceptions import Error, ErrorConnect

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.sysctl-cpu.{__name__}")

# Paramiko is a bit too noisy, lower its log level.
logging.getLogger("paramiko").setLevel(logging.WARNING)

class SSHSysctl(_SysctlBase.SysctlBase):
    """Provide access to the sysctl registry of a remote host over SSH."""

    def __init__(self,
                 hostname: str,
                 username: str = "",
                 privkeypath: str | Path | None = None,
                 timeout: int | float | None = None,
                 port: int = 22):
        """
        Initialize a class instance and establish SSH connection to a remote host.

        Args:
            hostname: The name of the host to connect to.
            username: Username for authentication. Defaults to the current user.
            privkeypath: Path to the private key for authentication. Use the SSH agent and the keys
                         in standard locations by default.
            timeout: Timeout for establishing the SSH connection and running commands, in seconds.
                     Defaults to 60 seconds.
            port: The port number to connect to.

        Raises:
            ErrorConnect: If SSH connection cannot be established.
        """

        super().__init__(hostname=hostname)

        if not timeout:
            timeout = 60
        self.timeout = float(timeout)
        self.port = port

        if not username:
            username = os.getenv("USER", "")
        self.username = username

        if privkeypath:
            self.privkeypath: str | None = str(privkeypath)
        else:
            self.privkeypath = None

        self.ssh: paramiko.SSHClient | None = None

        _LOG.debug("Establishing SSH connection to %s, port %d, username '%s', timeout '%s', "
                   "priv. key '%s'", hostname, port, self.username, self.timeout,
                   self.privkeypath)

        try:
            self.ssh = paramiko.SSHClient()
            self.ssh.set_missing_host_key_policy(paramiko.AutoAddPolicy())
            self.ssh.connect(username=self.username, hostname=hostname, port=port,
                             key_filename=self.privkeypath, timeout=self.timeout,
                             allow_agent=True, look_for_keys=True)
        except paramiko.AuthenticationException as err:
            msg = Error(str(err)).indent(2)
            self.close()
            raise ErrorConnect(f"SSH authentication failed when connecting as "
                               f"'{self.username}':\n{msg}", host=hostname) from err
        except (paramiko.SSHException, OSError) as err:
            msg = Error(str(err)).indent(2)
            self.close()
            raise ErrorConnect(f"Cannot establish SSH connection with {self.timeout} secs "
                               f"time-out:\n{msg}", host=hostname) from err

    def close(self):
        """Close the SSH connection."""

        _LOG.debug("Closing SSH connection to %s", self.hostname)
        ClassHelpers.close(self, close_attrs=("ssh",))

    def _run(self, cmd: str) -> tuple[str, str, int]:
        """
        Run a command on the remote host in a new SSH session and wait for it to finish.

        Args:
            cmd: The command to run.

        Returns:
            A '(stdout, stderr, exitcode)' tuple.
        """

        if not self.ssh:
            raise Error(f"BUG: SSH connection{self.hostmsg} is closed")

        _LOG.debug("Running the following command%s:\n%s", self.hostmsg, cmd)

        try:
            _, stdout, stderr = self.ssh.exec_command(cmd, timeout=self.timeout)
            output = stdout.read().decode("utf-8", errors="replace")
            errors = stderr.read().decode("utf-8", errors="replace")
            exitcode = stdout.channel.recv_exit_status()
        except (paramiko.SSHException, OSError) as err:
            msg = Error(str(err)).indent(2)
            raise Error(f"Failed to run the following command{self.hostmsg}:\n  {cmd}\n"
                        f"The error is:\n{msg}") from err

        return output, errors, exitcode

    def _run_sysctl(self, key: str, opt: str = "-n") -> str | None:
        """
        Run 'sysctl' for a key on the remote host.

        Args:
            key: The sysctl key name.
            opt: The 'sysctl' option selecting what to print: "-n" for the value, "-N" for the
                 name only.

        Returns:
            The output of 'sysctl', or 'None' if the key does not exist or cannot be read.
        """

        output, errors, exitcode = self._run(f"sysctl {opt} {shlex.quote(key)}")

        # Some 'sysctl' versions exit with status 0 on unknown keys, but print an error message.
        if exitcode != 0 or errors:
            _LOG.debug("Sysctl '%s'%s is not available (exit code %d):\n%s",
                       key, self.hostmsg, exitcode, errors.strip())
            return None

        if output.endswith("\n"):
            output = output[:-1]
        return output

    def exists(self, key: str) -> bool:
        """Refer to 'SysctlBase.exists()'."""

        # Print only the name, so that keys with unreadable values exist too.
        return self._run_sysctl(key, opt="-N") is not None

    def read_text(self, key: str) -> str | None:
        """Refer to 'SysctlBase.read_text()'."""

        return self._run_sysctl(key)
