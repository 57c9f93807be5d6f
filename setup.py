from setuptools import setup

setup(
    name='stackline-interpreter',
    version='0.1.0',
    description='Two-phase interpreter for a line-oriented toy language',
    author='stackline contributors',
    package_dir={'stackline': 'src/stackline'},
    packages=['stackline', 'stackline.cli'],
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
            'stackline = stackline.cli.main:cli'
        ]
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
)
