from setuptools import setup, find_packages
import re

# Read version from aupay/__init__.py
with open('aupay/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='au-pay-calc',
    version=version,
    packages=find_packages(include=['aupay', 'aupay.*']),
    package_data={
        'aupay': ['tax-rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'au-pay-calc=aupay.cli.__main__:main',
            'au-pay-calc-mcp=aupay.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Australian payslip, tax and superannuation calculator.',
    python_requires='>=3.10',
)
