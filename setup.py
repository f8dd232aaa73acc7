from setuptools import setup

setup(
    name='intcode-vm',
    version='0.1.0',
    description='Intcode virtual machine with threaded amplifier pipelines',
    author='intcode contributors',
    package_dir={'intcode': 'src/intcode'},
    packages=['intcode', 'intcode.cli'],
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=[
        'click>=7.0',
        'rich>=10.0'
    ],
    extras_require={
        'test': ['pytest>=6.0'],
    },
    entry_points={
        'console_scripts': [
            'intcode = intcode.cli.main:cli'
        ]
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
)
