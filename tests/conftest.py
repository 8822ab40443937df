"""Shared fixtures: a small status file with three installed packages."""

import pytest

STATUS_TEXT = """Package: libws-commons-util-java
Status: install ok installed
Priority: optional
Section: java
Installed-Size: 101
Maintainer: Ubuntu Developers <ubuntu-devel-discuss@lists.ubuntu.com>
Architecture: all
Version: 1.0.1-7
Description: Common utilities from the Apache Web Services Project
 This is a small collection of utility classes, that allow high
 performance XML processing based on SAX.
Original-Maintainer: Debian Java Maintainers <pkg-java-maintainers@lists.alioth.debian.org>
Homepage: http://ws.apache.org/commons/util/

Package: python-pkg-resources
Status: install ok installed
Priority: optional
Section: python
Installed-Size: 175
Maintainer: Ubuntu Developers <ubuntu-devel-discuss@lists.ubuntu.com>
Architecture: all
Source: distribute
Version: 0.6.24-1ubuntu1
Replaces: python2.3-setuptools, python2.4-setuptools
Depends: python (>= 2.6), python (<< 2.8), lsb-release
Suggests: python-distribute, python-distribute-doc
Description: Package Discovery and Resource Access using pkg_resources
 The pkg_resources module provides an API for Python libraries to
 access their resource files.
Homepage: http://packages.python.org/distribute
Python-Version: 2.6, 2.7

Package: lsb-release
Status: install ok installed
Multi-Arch: foreign
Priority: extra
Section: misc
Installed-Size: 111
Maintainer: Ubuntu Developers <ubuntu-devel-discuss@lists.ubuntu.com>
Architecture: all
Source: lsb
Version: 4.0-0ubuntu20.2
Depends: python2.7, python (>= 2.7.1-0ubuntu2), python (<< 2.8)
Recommends: apt
Description: Linux Standard Base version reporting utility
 The Linux Standard Base (http://www.linuxbase.org/) is a standard
 core system.
 .
 The lsb-release command is a simple tool.
Homepage: http://www.linux-foundation.org/en/LSB
Original-Maintainer: Chris Lawrence <lawrencc@debian.org>
"""


@pytest.fixture
def status_text():
    return STATUS_TEXT


@pytest.fixture
def status_file(tmp_path):
    path = tmp_path / "status"
    path.write_text(STATUS_TEXT)
    return path
